"""Video family: ``::video-<platform>[title]{id=...}`` and ``::video{id=<url>}``.

    ::video-youtube{id=dQw4w9WgXcQ}
    → <iframe src="https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ"
              title="Video Player" class="rds-video" data-video="youtube"></iframe>

Without a platform suffix the ``id`` must itself be a URL and is used as
the iframe source (``data-video="url"``).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from directive_sugar.families.link import CUSTOM_URL_RE
from directive_sugar.families.protocol import first_text, invalid, require_kind
from directive_sugar.matcher import build_pattern
from directive_sugar.nodes import Element, RenderTarget
from directive_sugar.properties import merge_properties, resolve_source
from directive_sugar.utils.logger import get_logger

if TYPE_CHECKING:
    from directive_sugar.config import VideoConfig
    from directive_sugar.nodes import Directive, DirectiveKind

logger = get_logger(__name__)

URL_TYPE = "url"


class VideoResolver:
    """Resolver for ``::video`` leaf directives.

    Thread Safety:
        Stateless beyond the frozen config. Safe for concurrent use.
    """

    family: ClassVar[str] = "video"
    kind: ClassVar[DirectiveKind] = "leaf"

    __slots__ = ("class_name", "config", "pattern")

    def __init__(self, config: VideoConfig, class_prefix: str = "rds") -> None:
        self.config = config
        self.class_name = f"{class_prefix}-{self.family}"
        self.pattern = build_pattern(self.family, config.alias)

    def resolve(self, node: Directive, match: re.Match[str]) -> RenderTarget:
        require_kind(node, self.family, self.kind)

        video_id = node.attributes.get("id")
        if not video_id:
            raise invalid(node, self.family, "The `id` is missing.")

        platform = match.group(1)
        if platform is not None:
            template = self.config.platforms.get(platform)
            if template is None:
                raise invalid(
                    node, self.family, "The directive failed to match a valid video platform."
                )
            video_type = platform
            src = template.replace("{id}", video_id)
        elif CUSTOM_URL_RE.match(video_id):
            video_type = URL_TYPE
            src = video_id
        else:
            raise invalid(
                node, self.family, "Ensure a valid URL is passed via `id` instead of `#`."
            )

        title = first_text(node.children) or self.config.default_title

        local = {k: v for k, v in node.attributes.items() if k != "id"}
        properties = merge_properties(
            {"src": src, "title": title},
            {"className": [self.class_name]},
            resolve_source(self.config.iframe_props, node),
            {"data-video": video_type},
            local,
        )

        if not self.config.wrap:
            return RenderTarget(tag="iframe", properties=properties, children=())

        iframe = Element(location=node.location, tag="iframe", properties=properties)
        logger.debug("wrapping %s iframe for %s", video_type, node.name)
        return RenderTarget(
            tag="div",
            properties={"className": [f"{self.class_name}-wrapper"]},
            children=(iframe,),
        )
