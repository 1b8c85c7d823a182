"""Built-in directive families.

Families, in dispatch priority order:
- image: ``:::image-<tag>`` containers (figure/figcaption composition)
- video: ``::video[-<platform>]`` embeds
- link: ``:link`` decorated anchors (GitHub, npm, any URL)
- badge: ``:badge[-<type>]`` inline badges

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from directive_sugar.families.badge import BadgeResolver
from directive_sugar.families.image import ImageResolver
from directive_sugar.families.link import LinkResolver
from directive_sugar.families.protocol import FamilyResolver
from directive_sugar.families.video import VideoResolver

if TYPE_CHECKING:
    from directive_sugar.config import SugarConfig


def create_resolvers(config: SugarConfig) -> tuple[FamilyResolver, ...]:
    """Instantiate the built-in resolvers in dispatch priority order.

    Raises:
        ConfigError: If an alias is reserved by another family
    """
    prefix = config.class_prefix
    return (
        ImageResolver(config.image, prefix),
        VideoResolver(config.video, prefix),
        LinkResolver(config.link, prefix),
        BadgeResolver(config.badge, prefix),
    )


__all__ = [
    "BadgeResolver",
    "FamilyResolver",
    "ImageResolver",
    "LinkResolver",
    "VideoResolver",
    "create_resolvers",
]
