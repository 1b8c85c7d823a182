"""Exception classes for directive-sugar.

Every failure is a deterministic consequence of bad input or bad
options, so nothing here is retried or recovered. Errors propagate out
of the traversal unchanged and abort the whole run.

Hierarchy:
    SugarError
    ├── ConfigError              (options / pattern construction)
    └── DirectiveError           (one directive node)
        ├── DirectiveKindError   (wrong fencing for the family)
        └── DirectiveValidationError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from directive_sugar.location import SourceLocation

# Fence spelled out for each directive kind, used in kind error messages
FENCES: dict[str, tuple[str, str]] = {
    "container": (":::", "three colons"),
    "leaf": ("::", "double colons"),
    "text": (":", "single colon"),
}


class SugarError(Exception):
    """Base exception for all directive-sugar errors."""

    pass


class ConfigError(SugarError):
    """Invalid family options.

    Raised once, while options are merged or family patterns are
    compiled, never per node.
    """

    def __init__(self, family: str, message: str) -> None:
        """Initialize config error.

        Args:
            family: Family whose options are invalid (e.g., "video")
            message: Description of the problem
        """
        self.family = family
        self.message = message
        super().__init__(message)


class DirectiveError(SugarError):
    """A directive matched a family but could not be resolved.

    Subclass this for specific failure categories.
    """

    def __init__(
        self,
        family: str,
        message: str,
        name: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize directive error.

        Args:
            family: Family that claimed the directive (e.g., "badge")
            message: Full, user-facing error message
            name: Directive name as written in source (e.g., "badge-v")
            location: Source location of the directive (optional)
        """
        self.family = family
        self.directive_name = name
        self.location = location
        self.message = message

        if location is not None and location.is_known:
            message = f"{location}: {message}"
        super().__init__(message)


class DirectiveKindError(DirectiveError):
    """Directive used with the wrong fencing for its family.

    Example:
        ``:::badge`` (container) when badges must be ``:badge`` (text).
    """

    def __init__(
        self,
        family: str,
        actual: str,
        expected: str,
        name: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize kind error.

        Args:
            family: Family that claimed the directive
            actual: Kind found in source ("container", "leaf", "text")
            expected: Kind the family requires
            name: Directive name as written in source
            location: Source location of the directive (optional)
        """
        self.actual = actual
        self.expected = expected

        fence, words = FENCES[expected]
        article = "an" if family[0] in "aeiou" else "a"
        message = (
            f"Unexpected {actual} directive. "
            f"Use {words} (`{fence}`) for {article} `{family}` {expected} directive."
        )
        super().__init__(family, message, name=name, location=location)


class DirectiveValidationError(DirectiveError):
    """Family-specific precondition failed.

    Missing mandatory attribute, unknown sub-type suffix, malformed
    id/tab/color, or missing required child content.
    """

    def __init__(
        self,
        family: str,
        reason: str,
        name: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            family: Family that claimed the directive
            reason: What is wrong, phrased as a sentence
            name: Directive name as written in source
            location: Source location of the directive (optional)
        """
        self.reason = reason
        super().__init__(
            family,
            f"Invalid `{family}` directive. {reason}",
            name=name,
            location=location,
        )
