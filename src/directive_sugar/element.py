"""Generic element fallback for directives no family claims.

``:::aside{class="note wide" for=x}`` becomes ``<aside class="note wide" for="x">``:
the directive name is the tag and the attributes are used verbatim. No
validation happens here, whatever the directive holds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from directive_sugar.nodes import RenderTarget
from directive_sugar.properties import class_tokens

if TYPE_CHECKING:
    from directive_sugar.nodes import Directive, Properties

# HTML attribute name to property name
PROPERTY_NAMES: dict[str, str] = {
    "class": "className",
    "for": "htmlFor",
}


def create_element(node: Directive) -> RenderTarget:
    """Build a render target from the directive name and raw attributes."""
    properties: Properties = {}
    for name, value in node.attributes.items():
        key = PROPERTY_NAMES.get(name, name)
        if key == "className":
            properties[key] = class_tokens(value)
        else:
            properties[key] = value
    return RenderTarget(tag=node.name.lower(), properties=properties, children=node.children)
