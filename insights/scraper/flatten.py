"""HTML → plain text flattening for speech and summarisation consumers.

Block elements become line-separated chunks; inline markup collapses to its
text.  Links keep their text and lose their targets, images produce nothing,
and lines are never wrapped to a fixed width.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction, Tag

_HR_WIDTH = 40
_TABLE_COLUMN_SPACING = "   "


@dataclass(frozen=True)
class BlockFormat:
    """How a block element is laid out.

    ``leading``/``trailing`` are the line breaks required before/after the
    block; when two blocks meet the larger requirement wins.
    """

    leading: int = 1
    trailing: int = 1
    uppercase: bool = False
    prefix: str = ""


_PARAGRAPH = BlockFormat(leading=2, trailing=2)
_BLOCK = BlockFormat()
_HEADING = BlockFormat(leading=3, trailing=2, uppercase=True)

DEFAULT_FORMATS: Dict[str, BlockFormat] = {
    "p": _PARAGRAPH,
    "pre": _PARAGRAPH,
    "ul": _PARAGRAPH,
    "ol": _PARAGRAPH,
    "table": _PARAGRAPH,
    "hr": _PARAGRAPH,
    "blockquote": BlockFormat(leading=2, trailing=2, prefix="> "),
    # Headings are shouted by default; the article title heading is not.
    "h1": BlockFormat(leading=3, trailing=2),
    "h2": _HEADING,
    "h3": _HEADING,
    "h4": _HEADING,
    "h5": _HEADING,
    "h6": _HEADING,
}
for _name in (
    "address", "article", "aside", "body", "dd", "details", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "header", "html",
    "li", "main", "nav", "section", "summary", "tr",
):
    DEFAULT_FORMATS[_name] = _BLOCK

# Elements that produce no output at all, children included.
SKIPPED_TAGS = frozenset(
    {"img", "picture", "svg", "script", "style", "noscript", "template", "head", "title"}
)

_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

_Block = Tuple[int, str, int]


class _TextBuilder:
    """Collects inline runs and finished blocks for one container element."""

    def __init__(self) -> None:
        self._blocks: List[_Block] = []
        self._lines: List[str] = []
        self._inline: List[str] = []

    def add_inline(self, text: str) -> None:
        self._inline.append(text)

    def line_break(self) -> None:
        self._lines.append(" ".join("".join(self._inline).split()))
        self._inline = []

    def add_block(self, text: str, leading: int, trailing: int) -> None:
        self._flush_inline()
        if text:
            self._blocks.append((leading, text, trailing))

    def _flush_inline(self) -> None:
        if self._inline:
            self.line_break()
        lines, self._lines = self._lines, []
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        if lines:
            self._blocks.append((1, "\n".join(lines), 1))

    def result(self) -> _Block:
        """Return ``(leading, text, trailing)`` for everything collected."""
        self._flush_inline()
        if not self._blocks:
            return 0, "", 0
        parts = [self._blocks[0][1]]
        for previous, current in zip(self._blocks, self._blocks[1:]):
            parts.append("\n" * max(previous[2], current[0]))
            parts.append(current[1])
        return self._blocks[0][0], "".join(parts), self._blocks[-1][2]


def _render_children(node: Tag, formats: Mapping[str, BlockFormat]) -> _Block:
    builder = _TextBuilder()
    _walk(node, builder, formats)
    return builder.result()


def _walk(node: Tag, builder: _TextBuilder, formats: Mapping[str, BlockFormat]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            _render_tag(child, builder, formats)
        elif not isinstance(child, _NON_TEXT_STRINGS):
            builder.add_inline(str(child))


def _render_list(tag: Tag, formats: Mapping[str, BlockFormat]) -> str:
    ordered = tag.name == "ol"
    try:
        start = int(tag.get("start", 1))
    except ValueError:
        start = 1

    items: List[str] = []
    for index, item in enumerate(tag.find_all("li", recursive=False)):
        _, text, _ = _render_children(item, formats)
        if not text:
            continue
        marker = f"{start + index}. " if ordered else " * "
        indent = " " * len(marker)
        first, *rest = text.split("\n")
        lines = [marker + first] + [indent + line if line else "" for line in rest]
        items.append("\n".join(lines))
    return "\n".join(items)


def _render_table(tag: Tag, formats: Mapping[str, BlockFormat]) -> str:
    rows: List[str] = []
    for row in tag.find_all("tr"):
        if row.find_parent("table") is not tag:
            continue
        cells = []
        for cell in row.find_all(["td", "th"], recursive=False):
            _, text, _ = _render_children(cell, formats)
            text = " ".join(text.split())
            if text:
                cells.append(text)
        if cells:
            rows.append(_TABLE_COLUMN_SPACING.join(cells))
    return "\n".join(rows)


def _render_tag(tag: Tag, builder: _TextBuilder, formats: Mapping[str, BlockFormat]) -> None:
    name = tag.name
    if name in SKIPPED_TAGS:
        return
    if name == "br":
        builder.line_break()
        return

    fmt: Optional[BlockFormat] = formats.get(name)
    if fmt is None:
        # Inline element (a, span, em, ...): only its text survives.
        _walk(tag, builder, formats)
        return

    leading, trailing = fmt.leading, fmt.trailing
    if name == "hr":
        text = "-" * _HR_WIDTH
    elif name == "pre":
        text = tag.get_text().strip("\n")
    elif name in ("ul", "ol"):
        text = _render_list(tag, formats)
    elif name == "table":
        text = _render_table(tag, formats)
    else:
        inner_leading, text, inner_trailing = _render_children(tag, formats)
        leading = max(leading, inner_leading)
        trailing = max(trailing, inner_trailing)

    if fmt.uppercase:
        text = text.upper()
    if fmt.prefix:
        text = "\n".join(fmt.prefix + line if line else fmt.prefix.rstrip() for line in text.split("\n"))
    builder.add_block(text, leading, trailing)


def flatten_html(content_html: str, formats: Optional[Mapping[str, BlockFormat]] = None) -> str:
    """Convert an HTML fragment to plain text.

    *formats* overrides entries of :data:`DEFAULT_FORMATS` by tag name, e.g.
    ``{"h2": BlockFormat(leading=3, trailing=2)}`` to stop uppercasing ``<h2>``.
    """
    table: Dict[str, BlockFormat] = dict(DEFAULT_FORMATS)
    if formats:
        table.update(formats)
    soup = BeautifulSoup(content_html, "html.parser")
    _, text, _ = _render_children(soup, table)
    return text
