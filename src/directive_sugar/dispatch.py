"""Directive dispatcher.

Walks a document once, bottom-up, and gives every directive a render
target: the first family (image, video, link, badge) whose pattern
matches the directive name resolves it, otherwise the generic element
fallback does.

Thread Safety:
A Dispatcher is immutable after creation. Safe to share.

Example:
    >>> dispatcher = Dispatcher(SugarConfig.from_dict({"badge": {"alias": "b"}}))
    >>> resolved = dispatcher.resolve(doc)
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from directive_sugar.config import SugarConfig
from directive_sugar.element import create_element
from directive_sugar.errors import ConfigError
from directive_sugar.families import create_resolvers
from directive_sugar.nodes import Directive
from directive_sugar.utils.logger import get_logger
from directive_sugar.visitor import transform

if TYPE_CHECKING:
    from directive_sugar.families import FamilyResolver
    from directive_sugar.nodes import Document, Node

logger = get_logger(__name__)


class Dispatcher:
    """Resolve every directive of a document exactly once.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_config", "_resolvers")

    def __init__(self, config: SugarConfig | None = None) -> None:
        """Compile the family patterns.

        Args:
            config: Merged configuration; defaults when None

        Raises:
            ConfigError: If an alias is reserved by or shared with another family
        """
        self._config = config if config is not None else SugarConfig()
        self._resolvers = create_resolvers(self._config)
        _check_disjoint_aliases(self._config)

    @property
    def config(self) -> SugarConfig:
        return self._config

    @property
    def resolvers(self) -> tuple[FamilyResolver, ...]:
        """Family resolvers in priority order."""
        return self._resolvers

    def resolve(self, doc: Document) -> Document:
        """Return a new document in which every directive carries its target.

        Raises:
            DirectiveError: On the first directive that fails to resolve;
                no partial document is returned
        """
        return transform(doc, self._visit)

    def resolve_node(self, node: Directive) -> Directive:
        """Resolve a single directive (its children are left as they are)."""
        for resolver in self._resolvers:
            match = resolver.pattern.match(node.name)
            if match is None:
                continue
            target = resolver.resolve(node, match)
            logger.debug("%s directive '%s' -> <%s>", resolver.family, node.name, target.tag)
            return dataclasses.replace(node, target=target)

        logger.debug("unmatched directive '%s', using generic element", node.name)
        return dataclasses.replace(node, target=create_element(node))

    def _visit(self, node: Node) -> Node:
        if isinstance(node, Directive) and not node.is_resolved:
            return self.resolve_node(node)
        return node


def _check_disjoint_aliases(config: SugarConfig) -> None:
    """Raise ConfigError when two families claim the same directive name."""
    owners: dict[str, str] = {}
    for family_config in (config.image, config.video, config.link, config.badge):
        for alias in family_config.aliases:
            owner = owners.setdefault(alias, family_config.family)
            if owner != family_config.family:
                raise ConfigError(
                    family_config.family,
                    f"The alias '{alias}' is already used by the '{owner}' directive.",
                )
