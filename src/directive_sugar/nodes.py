"""Typed AST nodes for directive-sugar.

All AST nodes are frozen dataclasses with slots. The upstream parser (or
``directive_sugar.serialization.from_mdast``) builds the tree; resolution
never mutates a node but returns a new tree in which every directive
carries a ``RenderTarget``.

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── BlockQuote
│   ├── List
│   ├── ListItem
│   ├── ThematicBreak
│   ├── HtmlBlock
│   └── CodeBlock
├── Inline (inline elements)
│   ├── Text
│   ├── Emphasis
│   ├── Strong
│   ├── Strikethrough
│   ├── Link
│   ├── Image
│   ├── CodeSpan
│   ├── LineBreak
│   ├── SoftBreak
│   └── HtmlInline
├── Directive (container, leaf or text)
└── Element (concrete element produced by a resolver)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from directive_sugar.location import SourceLocation

type PropertyValue = str | bool | list[str]
type Properties = dict[str, PropertyValue]
type DirectiveKind = Literal["container", "leaf", "text"]

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages.

    """

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content."""

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Deleted text (GFM).

    Markdown: ~~text~~
    HTML: <del>text</del>

    """

    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url "title")
    HTML: <a href="url" title="title">text</a>

    """

    url: str
    title: str | None
    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image.

    Markdown: ![alt](url "title")
    HTML: <img src="url" alt="alt" title="title">

    ``properties`` holds extra attributes injected by the image family
    (``img_props``); they are rendered after ``src``/``alt``/``title``.

    """

    url: str
    alt: str
    title: str | None = None
    properties: Mapping[str, PropertyValue] | None = None


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code."""

    code: str


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break."""


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline in paragraph)."""


@dataclass(frozen=True, slots=True)
class HtmlInline(Node):
    """Inline raw HTML, passed through unchanged."""

    html: str


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX or setext heading."""

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    ``is_label`` marks the paragraph holding a container directive's
    ``[label]`` text (``:::image-figure[caption]``).

    """

    children: tuple[Node, ...]
    is_label: bool = False


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote."""

    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item."""

    children: tuple[Node, ...]
    checked: bool | None = None


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list."""

    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break (horizontal rule)."""


@dataclass(frozen=True, slots=True)
class HtmlBlock(Node):
    """Raw HTML block, passed through unchanged."""

    html: str


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Fenced or indented code block."""

    code: str
    info: str | None = None


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node."""

    children: tuple[Node, ...]


# =============================================================================
# Directive and resolver output
# =============================================================================


@dataclass(frozen=True, slots=True)
class Element(Node):
    """A concrete HTML element built by a resolver.

    Used for generated children such as ``figcaption``, the link icon or
    the iframe of a wrapped video.

    """

    tag: str
    properties: Properties = field(default_factory=dict)
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderTarget:
    """Element a directive resolves to.

    Attributes:
        tag: Element name (e.g., "span", "figure")
        properties: Final property map; ``className`` is always a list
        children: Replacement children rendered inside the element

    """

    tag: str
    properties: Properties
    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Directive(Node):
    """Directive recognized by the upstream parser.

    Markdown:
        :name[label]{attrs}            (text)
        ::name[label]{attrs}           (leaf)
        :::name[label]{attrs} ... :::  (container)

    ``target`` is None until the dispatcher resolves the node; it is
    written exactly once, by one family resolver or by the fallback.

    """

    kind: DirectiveKind
    name: str
    attributes: Mapping[str, str]
    children: tuple[Node, ...]
    target: RenderTarget | None = None

    @property
    def is_resolved(self) -> bool:
        """True once a resolver (or the fallback) produced a target."""
        return self.target is not None


# PEP 695 type aliases for documentation and annotations
type Inline = (
    Text
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | Image
    | CodeSpan
    | LineBreak
    | SoftBreak
    | HtmlInline
    | Directive
    | Element
)

type Block = (
    Document
    | Heading
    | Paragraph
    | BlockQuote
    | List
    | ListItem
    | ThematicBreak
    | HtmlBlock
    | CodeBlock
    | Directive
    | Element
)
