"""Directive name patterns for the built-in families.

Each family claims the directive names built from its canonical name plus
user aliases:

- ``image`` / ``image-figure`` / ``img-figure`` (sub-typed families)
- ``link`` / ``l`` (families without a sub-type)

The captured suffix (group 1) is the family sub-type: badge preset, image
tag or video platform.

Example:
    >>> pattern = build_pattern("badge", "b")
    >>> pattern.match("b-v").group(1)
    'v'
    >>> build_pattern("image", "video")
    Traceback (most recent call last):
    ...
    directive_sugar.errors.ConfigError: The alias 'video' is reserved and cannot be used for the 'image' directive.

"""

from __future__ import annotations

import re
from collections.abc import Iterable

from directive_sugar.errors import ConfigError

# Canonical family names, in dispatch priority order
RESERVED_NAMES: tuple[str, ...] = ("image", "video", "link", "badge")

type Alias = str | Iterable[str] | None


def normalize_aliases(canonical: str, alias: Alias) -> tuple[str, ...]:
    """Union ``canonical`` with the user aliases, keeping first-seen order."""
    if alias is None:
        extra: Iterable[str] = ()
    elif isinstance(alias, str):
        extra = (alias,)
    else:
        extra = alias
    return tuple(dict.fromkeys((canonical, *extra)))


def build_pattern(canonical: str, alias: Alias = None, *, subtyped: bool = True) -> re.Pattern[str]:
    """Compile the name pattern for one family.

    Args:
        canonical: Canonical family name (e.g., "badge")
        alias: None, one alias, or several aliases
        subtyped: Whether ``<alias>-<suffix>`` names belong to the family

    Returns:
        Compiled pattern; group 1 holds the suffix when ``subtyped``

    Raises:
        ConfigError: If an alias is empty or equals another family's
            canonical name
    """
    aliases = normalize_aliases(canonical, alias)

    for name in aliases:
        if not name:
            raise ConfigError(canonical, f"Empty alias for the '{canonical}' directive.")
        if name in RESERVED_NAMES and name != canonical:
            raise ConfigError(
                canonical,
                f"The alias '{name}' is reserved and cannot be used for the '{canonical}' directive.",
            )

    alternatives = "|".join(re.escape(name) for name in aliases)
    suffix = r"(?:-(\w+))?" if subtyped else ""
    return re.compile(rf"^(?:{alternatives}){suffix}$", re.ASCII)
