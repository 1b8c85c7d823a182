"""Image family: ``:::image-<tag>`` containers.

Wraps the images of a container in an HTML element. The ``figure`` tag
also generates a ``figcaption`` from the directive label or from the alt
text of the leading image:

    :::image-figure[A cat on a mat]
    ![cat](cat.png)
    :::
    → <figure><img src="cat.png" alt="cat"><figcaption>A cat on a mat</figcaption></figure>

    :::image-a{href=https://example.com}
    ![logo](logo.svg)
    :::
    → <a href="https://example.com"><img src="logo.svg" alt="logo"></a>

The container must hold at least one image, anywhere in its body.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar

from directive_sugar.families.protocol import (
    invalid,
    label_paragraph,
    require_kind,
    single_image,
)
from directive_sugar.matcher import build_pattern
from directive_sugar.nodes import Directive, Element, Image, Paragraph, RenderTarget, Text
from directive_sugar.properties import merge_properties, resolve_source
from directive_sugar.visitor import child_nodes, with_children

if TYPE_CHECKING:
    from directive_sugar.config import ImageConfig
    from directive_sugar.nodes import DirectiveKind, Node

VALID_TAGS: frozenset[str] = frozenset(
    (
        "figure",
        "a",
        "div",
        "span",
        "section",
        "article",
        "main",
        "aside",
        "header",
        "footer",
        "nav",
        "fieldset",
        "form",
    )
)


def _content(node: Node) -> tuple[Node, ...]:
    """Children that will be rendered: a resolved directive renders its target."""
    if isinstance(node, Directive) and node.target is not None:
        return node.target.children
    return child_nodes(node)


def _with_content(node: Node, children: tuple[Node, ...]) -> Node:
    if isinstance(node, Directive) and node.target is not None:
        return dataclasses.replace(
            node, target=dataclasses.replace(node.target, children=children)
        )
    return with_children(node, children)


def find_image(nodes: tuple[Node, ...]) -> Image | None:
    """Depth-first search for the first image that will be rendered."""
    for node in nodes:
        if isinstance(node, Image):
            return node
        found = find_image(_content(node))
        if found is not None:
            return found
    return None


def map_images(
    nodes: tuple[Node, ...],
    fn: Callable[[Image], Image],
    *,
    first_only: bool = False,
) -> tuple[Node, ...]:
    """Apply ``fn`` to images in ``find_image`` order (only the first one if asked)."""
    done = False

    def walk(node: Node) -> Node:
        nonlocal done
        if done:
            return node
        if isinstance(node, Image):
            done = first_only
            return fn(node)
        children = _content(node)
        if not children:
            return node
        new_children = tuple(walk(child) for child in children)
        if new_children == children:
            return node
        return _with_content(node, new_children)

    return tuple(walk(node) for node in nodes)


class ImageResolver:
    """Resolver for ``:::image-<tag>`` container directives.

    Thread Safety:
        Stateless beyond the frozen config. Safe for concurrent use.
    """

    family: ClassVar[str] = "image"
    kind: ClassVar[DirectiveKind] = "container"

    __slots__ = ("config", "pattern")

    def __init__(self, config: ImageConfig, class_prefix: str = "rds") -> None:
        # image elements carry no default class
        self.config = config
        self.pattern = build_pattern(self.family, config.alias)

    def resolve(self, node: Directive, match: re.Match[str]) -> RenderTarget:
        require_kind(node, self.family, self.kind)

        tag = match.group(1)
        if tag not in VALID_TAGS:
            raise invalid(node, self.family, "The directive failed to match a valid HTML tag.")

        if find_image(node.children) is None:
            raise invalid(node, self.family, "The image is missing.")

        children = node.children
        img_props = resolve_source(self.config.img_props, node)
        if img_props:
            children = map_images(
                children,
                lambda image: dataclasses.replace(
                    image, properties=merge_properties(image.properties, img_props)
                ),
                first_only=self.config.img_props_scope == "first",
            )

        if self.config.strip_paragraph:
            children = tuple(self._unwrap(child) for child in children)

        if tag == "figure":
            return self._figure(node, children)

        properties = merge_properties(
            resolve_source(self.config.element_props, node),
            node.attributes,
        )
        return RenderTarget(tag=tag, properties=properties, children=children)

    def _unwrap(self, child: Node) -> Node:
        if isinstance(child, Paragraph) and not child.is_label:
            image = single_image(child)
            if image is not None:
                return image
        return child

    def _figure(self, node: Directive, children: tuple[Node, ...]) -> RenderTarget:
        label = label_paragraph(children)
        if label is not None and label.children and isinstance(label.children[0], Text):
            caption = label.children
            children = children[1:]
        else:
            alt = self._leading_alt(children)
            if not alt:
                raise invalid(
                    node,
                    self.family,
                    "The figcaption text is missing. Specify it in the `[]` of "
                    "`:::image-figure[]{}` or `![]()`.",
                )
            caption = (Text(location=node.location, content=alt),)

        figcaption = Element(
            location=node.location,
            tag="figcaption",
            properties=merge_properties(
                resolve_source(self.config.figcaption_props, node),
                node.attributes,
            ),
            children=caption,
        )
        return RenderTarget(
            tag="figure",
            properties=merge_properties(resolve_source(self.config.figure_props, node)),
            children=(*children, figcaption),
        )

    @staticmethod
    def _leading_alt(children: tuple[Node, ...]) -> str | None:
        if not children:
            return None
        first = children[0]
        if isinstance(first, Paragraph) and not first.is_label:
            first = next((c for c in first.children if isinstance(c, Image)), first)
        if isinstance(first, Image):
            return first.alt
        return None
