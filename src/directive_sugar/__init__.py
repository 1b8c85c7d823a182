"""
directive-sugar: turn markdown directives into HTML elements

Rewrites container (``:::``), leaf (``::``) and text (``:``) directives
into concrete HTML elements before serialization. Four families are
built in:

- ``:::image-<tag>``  wraps images (``figure`` adds a ``figcaption``)
- ``::video-<platform>{id=...}``  embeds a video iframe
- ``:link{id=...}``  GitHub account/repo, npm package or URL with an icon
- ``:badge[-<type>][text]{color=...}``  inline badge

Any other directive becomes a plain element named after the directive.

Quick Start:
    >>> from directive_sugar import DirectiveSugar
    >>> from directive_sugar.serialization import from_mdast
    >>> sugar = DirectiveSugar({"badge": {"alias": "b"}})
    >>> doc = from_mdast(mdast_tree)
    >>> resolved = sugar(doc)
    >>> html = sugar.render(doc)

Errors:
    ConfigError is raised when options are invalid; DirectiveError
    subclasses abort the run at the first directive that cannot be
    resolved.
"""

from collections.abc import Mapping
from typing import Any

from directive_sugar.config import (
    BadgeConfig,
    BadgePreset,
    ImageConfig,
    LinkConfig,
    SugarConfig,
    VideoConfig,
)
from directive_sugar.dispatch import Dispatcher
from directive_sugar.element import create_element
from directive_sugar.errors import (
    ConfigError,
    DirectiveError,
    DirectiveKindError,
    DirectiveValidationError,
    SugarError,
)
from directive_sugar.location import SourceLocation
from directive_sugar.matcher import build_pattern
from directive_sugar.nodes import (
    Block,
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
    Inline,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    RenderTarget,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)
from directive_sugar.properties import (
    ComputedProperties,
    StaticProperties,
    merge_properties,
    merge_sources,
    resolve_source,
)
from directive_sugar.renderers.html import HtmlRenderer
from directive_sugar.visitor import BaseVisitor, transform

__version__ = "0.1.0"

type Options = SugarConfig | Mapping[str, Any] | None


def _as_config(options: Options) -> SugarConfig:
    if isinstance(options, SugarConfig):
        return options
    return SugarConfig.from_dict(options)


class DirectiveSugar:
    """Resolve and render directives with one set of options.

    Usage:
        >>> sugar = DirectiveSugar({"video": {"wrap": True}})
        >>> resolved = sugar(doc)
        >>> html = sugar.render(doc)

    Thread Safety:
        Config and dispatcher are immutable. Safe to share across threads.

    """

    __slots__ = ("_dispatcher", "_renderer")

    def __init__(self, options: Options = None) -> None:
        """Merge options over the defaults and compile the family patterns.

        Args:
            options: Mapping keyed by family ("image", "video", "link",
                "badge") or a ready SugarConfig

        Raises:
            ConfigError: If the options are invalid
        """
        self._dispatcher = Dispatcher(_as_config(options))
        self._renderer = HtmlRenderer()

    @property
    def config(self) -> SugarConfig:
        return self._dispatcher.config

    def __call__(self, doc: Document) -> Document:
        """Resolve every directive of ``doc``; returns a new document."""
        return self._dispatcher.resolve(doc)

    def render(self, doc: Document) -> str:
        """Resolve ``doc`` and serialize it to HTML."""
        return self._renderer.render(self(doc))


def resolve(doc: Document, options: Options = None) -> Document:
    """Resolve every directive of ``doc`` with ``options``.

    Example:
        >>> resolved = resolve(doc, {"badge": {"default_color": "gray"}})
    """
    return Dispatcher(_as_config(options)).resolve(doc)


def render(doc: Document, options: Options = None) -> str:
    """Resolve ``doc`` with ``options`` and render it to HTML."""
    return DirectiveSugar(options).render(doc)


__all__ = [
    "__version__",
    # Facade
    "DirectiveSugar",
    "render",
    "resolve",
    # Configuration
    "BadgeConfig",
    "BadgePreset",
    "ImageConfig",
    "LinkConfig",
    "SugarConfig",
    "VideoConfig",
    # Resolution
    "Dispatcher",
    "build_pattern",
    "create_element",
    "ComputedProperties",
    "StaticProperties",
    "merge_properties",
    "merge_sources",
    "resolve_source",
    # Errors
    "ConfigError",
    "DirectiveError",
    "DirectiveKindError",
    "DirectiveValidationError",
    "SugarError",
    # AST
    "BaseVisitor",
    "Block",
    "BlockQuote",
    "CodeBlock",
    "CodeSpan",
    "Directive",
    "Document",
    "Element",
    "Emphasis",
    "Heading",
    "HtmlBlock",
    "HtmlInline",
    "Image",
    "Inline",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "RenderTarget",
    "SoftBreak",
    "SourceLocation",
    "Strikethrough",
    "Strong",
    "Text",
    "ThematicBreak",
    "transform",
    # Rendering
    "HtmlRenderer",
]
