"""FamilyResolver protocol and helpers shared by the built-in families.

A family resolver turns one directive node into a ``RenderTarget``. The
dispatcher owns the name matching: it hands the resolver the node and the
match object of the family pattern (group 1 is the sub-type suffix, when
the family has one).

Thread Safety:
Resolvers must be stateless. They hold a reference to their frozen
family config and nothing else, so one instance may resolve any number
of nodes from any thread.

Example:
    >>> class ShoutResolver:
    ...     family = "shout"
    ...     kind = "text"
    ...
    ...     def __init__(self):
    ...         self.pattern = re.compile(r"^shout$")
    ...
    ...     def resolve(self, node, match):
    ...         return RenderTarget("strong", {}, node.children)
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from directive_sugar.errors import DirectiveKindError, DirectiveValidationError
from directive_sugar.nodes import Image, Paragraph, Text

if TYPE_CHECKING:
    from directive_sugar.nodes import Directive, DirectiveKind, Node, RenderTarget


@runtime_checkable
class FamilyResolver(Protocol):
    """Protocol for directive family resolvers.

    Attributes:
        family: Canonical family name (e.g., "badge")
        kind: The only directive kind the family accepts
        pattern: Compiled name pattern (canonical name plus aliases)

    """

    family: ClassVar[str]
    """Canonical family name, also the reserved alias."""

    kind: ClassVar[DirectiveKind]
    """Directive kind required by the family."""

    pattern: re.Pattern[str]
    """Compiled name pattern; group 1 holds the sub-type suffix, if any."""

    def resolve(self, node: Directive, match: re.Match[str]) -> RenderTarget:
        """Resolve a directive whose name matched ``pattern``.

        Args:
            node: The directive node (children already resolved)
            match: Result of ``pattern.match(node.name)``

        Returns:
            The element the directive renders as

        Raises:
            DirectiveKindError: If ``node.kind`` is not ``kind``
            DirectiveValidationError: If a family precondition fails
        """
        ...


def require_kind(node: Directive, family: str, expected: DirectiveKind) -> None:
    """Raise DirectiveKindError unless ``node`` has the ``expected`` kind."""
    if node.kind != expected:
        raise DirectiveKindError(
            family, node.kind, expected, name=node.name, location=node.location
        )


def invalid(node: Directive, family: str, reason: str) -> DirectiveValidationError:
    """Build a validation error located at ``node``."""
    return DirectiveValidationError(family, reason, name=node.name, location=node.location)


def first_text(children: tuple[Node, ...]) -> str | None:
    """Content of the leading child when it is ``Text``, else None.

    A label that opens with other inline content (``[**A** b]``) has no
    usable text; empty text counts as none.
    """
    if children and isinstance(children[0], Text):
        return children[0].content or None
    return None


def label_paragraph(children: tuple[Node, ...]) -> Paragraph | None:
    """The ``[label]`` paragraph of a container directive, if it leads the body."""
    if children and isinstance(children[0], Paragraph) and children[0].is_label:
        return children[0]
    return None


def single_image(paragraph: Paragraph) -> Image | None:
    """The image of a paragraph whose only non-blank child is one image."""
    content = [
        child
        for child in paragraph.children
        if not (isinstance(child, Text) and not child.content.strip())
    ]
    if len(content) == 1 and isinstance(content[0], Image):
        return content[0]
    return None
