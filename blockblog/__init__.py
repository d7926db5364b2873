"""
django-blockblog - A block-editor blogging backend for Django.

Features:
- Editor.js block documents stored as plain HTML and parsed back for editing
- Public and private posts with owner-only editing
- Featured image upload to local storage (content-addressed) or Cloudinary
- Signed bearer tokens for API clients
- JSON REST API built on Django class-based views
"""

__version__ = "0.1.0"
