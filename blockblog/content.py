"""
Block documents and their HTML form.

Posts are written in a block editor (Editor.js) and stored as a single
HTML string. ``encode`` turns an ordered list of blocks into that string
and ``decode`` parses it back so the post can be edited again:

    >>> html = encode([Heading(2, "Intro"), ListBlock(True, ["a", "b"])])
    >>> html
    '<h2>Intro</h2><ol><li>a</li><li>b</li></ol>'
    >>> decode(html)
    [Heading(level=2, text='Intro'), ListBlock(ordered=True, items=('a', 'b'))]

Inline markup (bold, italic, links) inside a block is never interpreted.
It is copied into the HTML as-is and sliced back out of the source on
decode, so it survives a round trip character for character.

Neither direction raises on odd input: unknown block kinds encode to
nothing, and unknown or malformed HTML decodes to whatever blocks could
be recognised.
"""
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from html.parser import HTMLParser

from .conf import blog_settings
from .exceptions import ValidationError


@dataclass(frozen=True)
class Heading:
    """
    Section heading. Only h2-h4 are stored, so other levels are pulled
    into that range.
    """

    level: int
    text: str

    def __post_init__(self):
        levels = HEADING_TAGS.values()
        level = min(max(int(self.level), min(levels)), max(levels))
        object.__setattr__(self, "level", level)


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class ListBlock:
    """
    Ordered or unordered list.

    Items are inline HTML strings, or editor item objects exposing
    ``content`` or ``text``.
    """

    ordered: bool
    items: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Quote:
    text: str
    caption: str = ""

    def __post_init__(self):
        if self.caption is None:
            object.__setattr__(self, "caption", "")


@dataclass(frozen=True)
class UnknownBlock:
    """A block kind this app does not render. Encodes to nothing."""

    kind: str
    data: dict = field(default_factory=dict)


HEADING_TAGS = {"h2": 2, "h3": 3, "h4": 4}
LIST_TAGS = {"ul": False, "ol": True}

# Elements with no end tag
VOID_TAGS = frozenset([
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
])

# Start tags that implicitly end an open <p>
CLOSES_PARAGRAPH = frozenset([
    "address", "article", "aside", "blockquote", "div", "dl", "fieldset",
    "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hr", "main", "nav", "ol", "p", "pre", "section", "table", "ul",
])


def item_text(item):
    """Return the inline HTML of a list item given as a string or an object."""
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        content, text = item.get("content"), item.get("text")
    else:
        content, text = getattr(item, "content", None), getattr(item, "text", None)
    return content or text or ""


def encode_block(block):
    """Return the HTML element for a single block."""
    if isinstance(block, Heading):
        return f"<h{block.level}>{block.text}</h{block.level}>"

    if isinstance(block, Paragraph):
        return f"<p>{block.text}</p>"

    if isinstance(block, ListBlock):
        tag = "ol" if block.ordered else "ul"
        items = "".join(f"<li>{item_text(item)}</li>" for item in block.items)
        return f"<{tag}>{items}</{tag}>"

    if isinstance(block, Quote):
        cite = f"<cite>{block.caption}</cite>" if block.caption else ""
        return f"<blockquote><p>{block.text}</p>{cite}</blockquote>"

    return ""


def encode(document):
    """Serialize a document (list of blocks) to one HTML string."""
    return "".join(encode_block(block) for block in document)


class _Element:
    __slots__ = ("tag", "start", "inner_start", "children")

    def __init__(self, tag, start, inner_start):
        self.tag = tag
        self.start = start
        self.inner_start = inner_start
        self.children = []


class BlockParser(HTMLParser):
    """
    Collect the top-level block elements of an HTML fragment.

    Inner markup is taken from the source by offset rather than rebuilt
    from parser events, so entities, attributes and whitespace come back
    exactly as stored.
    """

    def __init__(self, source):
        super().__init__(convert_charrefs=True)
        self.source = source
        self.blocks = []
        self._stack = []
        self._line_starts = [0]
        for index, char in enumerate(source):
            if char == "\n":
                self._line_starts.append(index + 1)

    def parse(self):
        self.feed(self.source)
        self.close()
        if self._stack:
            # Unclosed elements run to the end of the input
            self._close(0, len(self.source))
        return self.blocks

    def _offset(self):
        lineno, column = self.getpos()
        return self._line_starts[lineno - 1] + column

    def handle_starttag(self, tag, attrs):
        if tag in VOID_TAGS:
            return

        start = self._offset()
        if self._stack:
            innermost = self._stack[-1].tag
            if (innermost == "p" and tag in CLOSES_PARAGRAPH) or (
                innermost == "li" and tag == "li"
            ):
                self._close(len(self._stack) - 1, start)

        start_tag = self.get_starttag_text() or ""
        self._stack.append(_Element(tag, start, start + len(start_tag)))

    def handle_startendtag(self, tag, attrs):
        # <br/> and friends never open an element
        pass

    def handle_endtag(self, tag):
        end = self._offset()
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].tag == tag:
                self._close(index, end)
                return
        # Stray end tag, ignored

    def _close(self, index, end):
        """Close the element at ``index`` and everything opened inside it."""
        while len(self._stack) > index:
            element = self._stack.pop()
            inner = self.source[element.inner_start:end]
            if self._stack:
                self._stack[0].children.append((element.start, element.tag, inner))
            else:
                block = self._build(element, inner)
                if block is not None:
                    self.blocks.append(block)

    def _build(self, element, inner):
        tag = element.tag
        children = sorted(element.children, key=lambda child: child[0])

        if tag in HEADING_TAGS:
            return Heading(HEADING_TAGS[tag], inner)

        if tag == "p":
            return Paragraph(inner)

        if tag in LIST_TAGS:
            items = [html for _start, child, html in children if child == "li"]
            return ListBlock(LIST_TAGS[tag], items)

        if tag == "blockquote":
            return Quote(
                _first(children, "p"),
                _first(children, "cite"),
            )

        return None


def _first(children, tag):
    for _start, child, html in children:
        if child == tag:
            return html
    return ""


def decode(html):
    """Parse stored HTML back into a document. Never raises."""
    if not html:
        return []
    return BlockParser(html).parse()


# Editor.js adapters

def _heading_level(value):
    levels = blog_settings.HEADING_LEVELS
    try:
        level = int(value)
    except (TypeError, ValueError):
        return levels[0]
    return min(max(level, min(levels)), max(levels))


def block_from_editor(raw):
    """Convert one Editor.js block ({"type": ..., "data": {...}}) to a block."""
    if not isinstance(raw, Mapping):
        return UnknownBlock("", {})

    kind = raw.get("type") or ""
    data = raw.get("data")
    if not isinstance(data, Mapping):
        data = {}

    if kind == "header":
        return Heading(_heading_level(data.get("level")), data.get("text") or "")
    if kind == "paragraph":
        return Paragraph(data.get("text") or "")
    if kind == "list":
        items = data.get("items") or []
        if not isinstance(items, list):
            items = []
        return ListBlock(data.get("style") == "ordered", items)
    if kind == "quote":
        return Quote(data.get("text") or "", data.get("caption") or "")
    return UnknownBlock(kind, dict(data))


def blocks_from_editor(payload):
    """
    Build a document from Editor.js output.

    Accepts the ``editor.save()`` result (``{"blocks": [...]}``), a bare
    list of blocks, or a JSON string of either. Raises ValidationError
    only when a string is not valid JSON.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise ValidationError(
                "Content must be valid editor JSON",
                errors={"blocks": [str(exc)]},
            ) from exc

    if isinstance(payload, Mapping):
        payload = payload.get("blocks")
    if not isinstance(payload, list):
        return []
    return [block_from_editor(raw) for raw in payload]


def block_to_editor(block):
    if isinstance(block, Heading):
        return {"type": "header", "data": {"text": block.text, "level": block.level}}
    if isinstance(block, Paragraph):
        return {"type": "paragraph", "data": {"text": block.text}}
    if isinstance(block, ListBlock):
        return {
            "type": "list",
            "data": {
                "style": "ordered" if block.ordered else "unordered",
                "items": [item_text(item) for item in block.items],
            },
        }
    if isinstance(block, Quote):
        return {"type": "quote", "data": {"text": block.text, "caption": block.caption}}
    return {"type": block.kind, "data": dict(block.data)}


def blocks_to_editor(document):
    """Return Editor.js ``data.blocks`` for a document."""
    return [block_to_editor(block) for block in document]
