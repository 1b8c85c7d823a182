"""Property sources and the property merger.

A property source is either a static mapping or a function of the
directive node (a deferred source). Sources are wrapped once, at config
construction, into ``StaticProperties`` or ``ComputedProperties`` so that
resolvers only ever call ``resolve_source``.

Merging rules (``merge_properties``), lowest precedence first:
- ``None`` sources are skipped.
- Any key except ``class``/``className``: a later truthy value overwrites
  an earlier one; falsy values never erase.
- ``class``/``className``: tokens from every source (whitespace-split
  strings or lists of strings) are unioned in first-seen order and emitted
  once as a ``className`` list.

Example:
    >>> merge_properties({"class": "a b", "id": "x"}, {"className": ["b", "c"], "id": ""})
    {'id': 'x', 'className': ['a', 'b', 'c']}

Thread Safety:
    Sources are frozen and merging is pure. Safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from directive_sugar.nodes import Directive, Properties

type PropertyMapping = Mapping[str, Any]
type PropertyFunction = Callable[[Directive], PropertyMapping | None]
type PropertySourceLike = PropertyMapping | PropertyFunction | PropertySource | None

CLASS_KEYS: frozenset[str] = frozenset(("class", "className"))


@dataclass(frozen=True, slots=True)
class StaticProperties:
    """A fixed property mapping."""

    properties: PropertyMapping

    def resolve(self, node: Directive) -> PropertyMapping | None:
        return self.properties


@dataclass(frozen=True, slots=True)
class ComputedProperties:
    """Properties computed from the directive node being resolved."""

    function: PropertyFunction

    def resolve(self, node: Directive) -> PropertyMapping | None:
        return self.function(node)


type PropertySource = StaticProperties | ComputedProperties


def as_source(value: PropertySourceLike) -> PropertySource | None:
    """Wrap a user-supplied value as a property source.

    Args:
        value: Mapping, callable of the directive node, existing source, or None

    Returns:
        The tagged source, or None when ``value`` is None

    Raises:
        TypeError: If ``value`` is neither a mapping nor callable
    """
    if value is None or isinstance(value, StaticProperties | ComputedProperties):
        return value
    if isinstance(value, Mapping):
        return StaticProperties(dict(value))
    if callable(value):
        return ComputedProperties(value)
    msg = f"Property source must be a mapping or a callable, got {type(value).__name__}"
    raise TypeError(msg)


def resolve_source(source: PropertySource | None, node: Directive) -> PropertyMapping | None:
    """Turn a source into a concrete mapping for ``node``."""
    if source is None:
        return None
    return source.resolve(node)


def class_tokens(value: Any) -> list[str]:
    """Split a ``class``/``className`` value into tokens.

    Strings are split on whitespace; lists and tuples keep their non-empty
    string members; anything else contributes nothing.
    """
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list | tuple):
        return [token for token in value if isinstance(token, str) and token]
    return []


def merge_properties(*sources: PropertyMapping | None) -> Properties:
    """Merge property mappings, lowest precedence first.

    Args:
        *sources: Concrete mappings (or None) in increasing precedence

    Returns:
        New property dict; ``className`` is present only when some source
        contributed a class token
    """
    merged: Properties = {}
    # dict keys keep insertion order and dedupe in one step
    classes: dict[str, None] = {}

    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if not value:
                continue
            if key in CLASS_KEYS:
                classes.update(dict.fromkeys(class_tokens(value)))
            else:
                merged[key] = value

    if classes:
        merged["className"] = list(classes)
    return merged


def merge_sources(
    sources: tuple[PropertySource | PropertyMapping | None, ...],
    node: Directive,
) -> Properties:
    """Resolve every source against ``node`` and merge the results.

    Plain mappings are accepted alongside sources so resolvers can mix
    configured sources with literal defaults and the node's attributes.
    """
    resolved = [
        resolve_source(source, node)
        if isinstance(source, StaticProperties | ComputedProperties)
        else source
        for source in sources
    ]
    return merge_properties(*resolved)
