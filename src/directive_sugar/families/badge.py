"""Badge family: ``:badge[text]{color=...}`` and ``:badge-<type>[]``.

Renders an inline ``span`` whose light/dark colors are exposed as CSS
custom properties:

    :badge[NEW]{color=green}
    → <span class="rds-badge" style="--badge-color-light:green; --badge-color-dark:green">NEW</span>

    :badge-v[]
    → <span data-badge="v" class="rds-badge" style="...">VIDEO</span>

Text comes from the preset for typed badges, falling back to the label.
Color precedence: ``color`` attribute, then preset color, then the
family default color.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from directive_sugar.config import split_color_pair
from directive_sugar.families.protocol import first_text, invalid, require_kind
from directive_sugar.matcher import build_pattern
from directive_sugar.nodes import RenderTarget, Text
from directive_sugar.properties import merge_properties, resolve_source

if TYPE_CHECKING:
    from directive_sugar.config import BadgeConfig, BadgePreset
    from directive_sugar.nodes import Directive, DirectiveKind

# Attributes read by the resolver and never forwarded to the span
CONSUMED_ATTRIBUTES = frozenset(("color",))


class BadgeResolver:
    """Resolver for ``:badge`` text directives.

    Thread Safety:
        Stateless beyond the frozen config. Safe for concurrent use.
    """

    family: ClassVar[str] = "badge"
    kind: ClassVar[DirectiveKind] = "text"

    __slots__ = ("class_name", "config", "pattern")

    def __init__(self, config: BadgeConfig, class_prefix: str = "rds") -> None:
        self.config = config
        self.class_name = f"{class_prefix}-{self.family}"
        self.pattern = build_pattern(self.family, config.alias)

    def resolve(self, node: Directive, match: re.Match[str]) -> RenderTarget:
        require_kind(node, self.family, self.kind)

        badge_type = match.group(1)
        preset = self._preset(node, badge_type)

        text = (preset.text if preset else None) or first_text(node.children)
        if not text:
            raise invalid(
                node,
                self.family,
                "The text is missing. Specify it in the `[]` of `:badge[]{}` or in the "
                "`text` field of the `presets` option in the `badge` config.",
            )

        light, dark = self._colors(node, preset)

        local = {k: v for k, v in node.attributes.items() if k not in CONSUMED_ATTRIBUTES}
        preset_props = None
        if badge_type is not None:
            preset_props = {
                "data-badge": badge_type,
                **(resolve_source(preset.props, node) or {}),
            }
        properties = merge_properties(
            {"className": [self.class_name]},
            resolve_source(self.config.span_props, node),
            preset_props,
            local,
        )

        style = f"--badge-color-light:{light}; --badge-color-dark:{dark}"
        extra_style = properties.get("style")
        properties["style"] = f"{style}; {extra_style}" if extra_style else style

        return RenderTarget(
            tag="span",
            properties=properties,
            children=(Text(location=node.location, content=text),),
        )

    def _preset(self, node: Directive, badge_type: str | None) -> BadgePreset | None:
        if badge_type is None:
            return None
        preset = self.config.presets.get(badge_type)
        if preset is None:
            raise invalid(
                node,
                self.family,
                "The directive failed to match a valid badge type. "
                "Please check the `presets` option in the `badge` config.",
            )
        return preset

    def _colors(self, node: Directive, preset: BadgePreset | None) -> tuple[str, str]:
        color = (
            node.attributes.get("color")
            or (preset.color if preset else None)
            or self.config.default_color
        )
        try:
            return split_color_pair(color)
        except ValueError as e:
            raise invalid(node, self.family, str(e)) from e
