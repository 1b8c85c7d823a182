"""HTML renderer using StringBuilder pattern.

Serializes a resolved tree. Directives render as their ``RenderTarget``;
a directive without a target renders its children only.

Property rendering:
- ``className`` is joined with spaces and written as ``class``
- ``htmlFor`` is written as ``for``
- ``True`` is a bare attribute; ``False`` and ``None`` are omitted

Thread Safety:
HtmlRenderer holds no per-render state. Multiple threads can share a
single instance and call render() concurrently.
"""

from collections.abc import Mapping
from typing import Any

from directive_sugar.nodes import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Directive,
    Document,
    Element,
    Emphasis,
    Heading,
    HtmlBlock,
    HtmlInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)
from directive_sugar.stringbuilder import StringBuilder
from directive_sugar.utils.text import escape_attribute, escape_html

VOID_ELEMENTS: frozenset[str] = frozenset(
    (
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    )
)

# Property name to HTML attribute name
ATTRIBUTE_NAMES: dict[str, str] = {
    "className": "class",
    "htmlFor": "for",
}


def render_attributes(properties: Mapping[str, Any] | None) -> str:
    """Render a property map as `` name="value"`` pairs, in insertion order."""
    if not properties:
        return ""
    parts: list[str] = []
    for key, value in properties.items():
        if value is None or value is False:
            continue
        name = ATTRIBUTE_NAMES.get(key, key)
        if value is True:
            parts.append(f" {name}")
            continue
        if isinstance(value, list | tuple):
            value = " ".join(str(v) for v in value)
        parts.append(f' {name}="{escape_attribute(str(value))}"')
    return "".join(parts)


class HtmlRenderer:
    """Render a resolved AST to HTML.

    Usage:
        >>> from directive_sugar import DirectiveSugar
        >>> sugar = DirectiveSugar()
        >>> html = HtmlRenderer().render(sugar(doc))

    Thread Safety:
        Stateless. Safe to share across threads.
    """

    __slots__ = ()

    def render(self, node: Document) -> str:
        """Render document AST to HTML string."""
        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Node, sb: StringBuilder) -> None:
        match block:
            case Heading():
                sb.append(f"<h{block.level}>")
                self._render_inlines(block.children, sb)
                sb.append_line(f"</h{block.level}>")
            case Paragraph():
                sb.append("<p>")
                self._render_inlines(block.children, sb)
                sb.append_line("</p>")
            case BlockQuote():
                sb.append_line("<blockquote>")
                self._render_blocks(block.children, sb)
                sb.append_line("</blockquote>")
            case List():
                self._render_list(block, sb)
            case ListItem():
                self._render_list_item(block, sb)
            case ThematicBreak():
                sb.append_line("<hr />")
            case HtmlBlock():
                sb.append_line(block.html.rstrip("\n"))
            case CodeBlock():
                lang = block.info.split()[0] if block.info and block.info.strip() else ""
                lang_class = f' class="language-{escape_attribute(lang)}"' if lang else ""
                sb.append(f"<pre><code{lang_class}>")
                sb.append(escape_html(block.code))
                sb.append_line("</code></pre>")
            case Directive() if block.kind != "text":
                self._render_directive(block, sb, block=True)
            case Document():
                self._render_blocks(block.children, sb)
            case _:
                # Inline content at block level (unwrapped images, elements)
                self._render_inline(block, sb)
                sb.append_line()

    def _render_blocks(self, blocks: tuple[Node, ...], sb: StringBuilder) -> None:
        for child in blocks:
            self._render_block(child, sb)

    def _render_list(self, lst: List, sb: StringBuilder) -> None:
        if lst.ordered:
            start_attr = f' start="{lst.start}"' if lst.start != 1 else ""
            sb.append_line(f"<ol{start_attr}>")
        else:
            sb.append_line("<ul>")
        for item in lst.items:
            self._render_list_item(item, sb)
        sb.append_line("</ol>" if lst.ordered else "</ul>")

    def _render_list_item(self, item: ListItem, sb: StringBuilder) -> None:
        sb.append("<li>")
        if item.checked is not None:
            checked = " checked" if item.checked else ""
            sb.append(f'<input type="checkbox" disabled{checked} /> ')
        # Single-paragraph items render without <p> tags
        if len(item.children) == 1 and isinstance(item.children[0], Paragraph):
            self._render_inlines(item.children[0].children, sb)
        else:
            sb.append_line()
            self._render_blocks(item.children, sb)
        sb.append_line("</li>")

    def _render_directive(self, directive: Directive, sb: StringBuilder, *, block: bool) -> None:
        target = directive.target
        if target is None:
            if block:
                self._render_blocks(directive.children, sb)
            else:
                self._render_inlines(directive.children, sb)
            return
        self._render_element(target.tag, target.properties, target.children, sb, block=block)

    def _render_element(
        self,
        tag: str,
        properties: Mapping[str, Any],
        children: tuple[Node, ...],
        sb: StringBuilder,
        *,
        block: bool,
    ) -> None:
        attrs = render_attributes(properties)
        if tag in VOID_ELEMENTS:
            sb.append(f"<{tag}{attrs} />")
        else:
            sb.append(f"<{tag}{attrs}>")
            if block and any(not _is_inline(child) for child in children):
                sb.append_line()
                self._render_blocks(children, sb)
            else:
                self._render_inlines(children, sb)
            sb.append(f"</{tag}>")
        if block:
            sb.append_line()

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Node, ...], sb: StringBuilder) -> None:
        for inline in inlines:
            self._render_inline(inline, sb)

    def _render_inline(self, inline: Node, sb: StringBuilder) -> None:
        match inline:
            case Text():
                sb.append(escape_html(inline.content))
            case Emphasis():
                sb.append("<em>")
                self._render_inlines(inline.children, sb)
                sb.append("</em>")
            case Strong():
                sb.append("<strong>")
                self._render_inlines(inline.children, sb)
                sb.append("</strong>")
            case Strikethrough():
                sb.append("<del>")
                self._render_inlines(inline.children, sb)
                sb.append("</del>")
            case Link():
                title = f' title="{escape_attribute(inline.title)}"' if inline.title else ""
                sb.append(f'<a href="{escape_attribute(inline.url)}"{title}>')
                self._render_inlines(inline.children, sb)
                sb.append("</a>")
            case Image():
                src = escape_attribute(inline.url)
                alt = escape_attribute(inline.alt)
                title = f' title="{escape_attribute(inline.title)}"' if inline.title else ""
                extra = render_attributes(inline.properties)
                sb.append(f'<img src="{src}" alt="{alt}"{title}{extra} />')
            case CodeSpan():
                sb.append("<code>")
                sb.append(escape_html(inline.code))
                sb.append("</code>")
            case LineBreak():
                sb.append("<br />\n")
            case SoftBreak():
                sb.append("\n")
            case HtmlInline():
                sb.append(inline.html)
            case Directive():
                self._render_directive(inline, sb, block=False)
            case Element():
                self._render_element(
                    inline.tag, inline.properties, inline.children, sb, block=False
                )
            case Paragraph():
                # Label paragraphs kept inside inline targets
                self._render_inlines(inline.children, sb)
            case _:
                self._render_block(inline, sb)


def _is_inline(node: Node) -> bool:
    match node:
        case Directive():
            return node.kind == "text"
        case (
            Text()
            | Emphasis()
            | Strong()
            | Strikethrough()
            | Link()
            | Image()
            | CodeSpan()
            | LineBreak()
            | SoftBreak()
            | HtmlInline()
            | Element()
        ):
            return True
        case _:
            return False
