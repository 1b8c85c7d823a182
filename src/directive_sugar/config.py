"""Family configuration for directive-sugar.

User options are merged over built-in defaults once per processing run
and frozen. Every resolver receives its family config by reference and
never mutates it.

Usage:
    >>> config = SugarConfig.from_dict({
    ...     "badge": {"alias": "b", "presets": {"n": {"text": "NEW", "color": "green"}}},
    ...     "video": {"platforms": {"my": "https://videos.example.com/{id}"}},
    ... })
    >>> config.badge.presets["n"].text
    'NEW'
    >>> sorted(config.video.platforms)
    ['bilibili', 'my', 'vimeo', 'youtube']

Property options (``img_props``, ``a_props``, ``span_props``, ...) accept
a mapping or a function of the directive node and are wrapped into
property sources here.

Thread Safety:
    All config objects are frozen dataclasses holding read-only mappings.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, ClassVar, Literal, Self

from directive_sugar.errors import ConfigError
from directive_sugar.matcher import normalize_aliases
from directive_sugar.properties import PropertySource, as_source
from directive_sugar.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PLATFORMS: Mapping[str, str] = MappingProxyType(
    {
        "youtube": "https://www.youtube-nocookie.com/embed/{id}",
        "bilibili": "https://player.bilibili.com/player.html?bvid={id}",
        "vimeo": "https://player.vimeo.com/video/{id}",
    }
)

DEFAULT_FAVICON_SOURCE = "https://www.google.com/s2/favicons?domain={domain}&sz=128"

DEFAULT_BADGE_COLOR = "#6b7280|#9ca3af"


def split_color_pair(value: str) -> tuple[str, str]:
    """Split ``"light|dark"`` (or a single color) into a light/dark pair.

    Raises:
        ValueError: If more than two ``|``-separated values are given
    """
    colors = [color.strip() for color in value.split("|")]
    if len(colors) == 1:
        return colors[0], colors[0]
    if len(colors) == 2:
        return colors[0], colors[1]
    msg = "The `color` expected one or two color values split by '|'."
    raise ValueError(msg)


def _filter_fields(cls: type, options: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only keys that are fields of ``cls`` (unknown keys are ignored)."""
    valid_fields = {f.name for f in fields(cls)}
    return {key: value for key, value in options.items() if key in valid_fields}


def _wrap_sources(options: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    for key in keys:
        if key in options:
            options[key] = as_source(options[key])
    return options


@dataclass(frozen=True, slots=True)
class BadgePreset:
    """A named badge variant (``:badge-<type>``).

    Attributes:
        text: Default badge text for this type
        color: Color, or ``"light|dark"`` pair; falls back to the family default
        props: Extra span properties (mapping or function of the node)

    """

    text: str | None = None
    color: str | None = None
    props: PropertySource | None = None

    @classmethod
    def from_value(cls, value: BadgePreset | Mapping[str, Any]) -> BadgePreset:
        """Build a preset from a mapping (or pass an existing preset through)."""
        if isinstance(value, BadgePreset):
            return value
        options = _filter_fields(cls, value)
        _wrap_sources(options, ("props",))
        return cls(**options)


DEFAULT_BADGE_PRESETS: Mapping[str, BadgePreset] = MappingProxyType(
    {
        "a": BadgePreset(text="ARTICLE"),
        "v": BadgePreset(text="VIDEO"),
        "o": BadgePreset(text="OFFICIAL"),
        "f": BadgePreset(text="FEED"),
        "t": BadgePreset(text="TOOL"),
        "w": BadgePreset(text="WEBSITE"),
        "g": BadgePreset(text="GITHUB"),
    }
)


@dataclass(frozen=True, slots=True)
class FamilyConfig:
    """Options shared by every family.

    Attributes:
        alias: Extra directive names for the family (canonical name excluded)

    """

    family: ClassVar[str] = ""
    source_fields: ClassVar[tuple[str, ...]] = ()

    alias: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> Self:
        """Create a family config from user options.

        Unknown keys are ignored. Property options are wrapped as sources
        and ``alias`` is normalized to a tuple.

        Raises:
            ConfigError: If an option value is invalid for the family
        """
        if isinstance(options, cls):
            return options
        kwargs = _filter_fields(cls, options or {})
        _wrap_sources(kwargs, cls.source_fields)
        if "alias" in kwargs:
            kwargs["alias"] = normalize_aliases(cls.family, kwargs["alias"])[1:]
        return cls(**kwargs)

    @property
    def aliases(self) -> tuple[str, ...]:
        """Canonical name followed by the user aliases."""
        return normalize_aliases(self.family, self.alias)


@dataclass(frozen=True, slots=True)
class ImageConfig(FamilyConfig):
    """Options for ``:::image-<tag>`` containers.

    Attributes:
        img_props: Properties injected into matched image nodes
        figure_props: Properties for the ``figure`` element
        figcaption_props: Properties for the generated ``figcaption``
        element_props: Properties for non-figure tags
        strip_paragraph: Replace paragraphs holding a single image by the image
        img_props_scope: Inject ``img_props`` into the first image or all images

    """

    family: ClassVar[str] = "image"
    source_fields: ClassVar[tuple[str, ...]] = (
        "img_props",
        "figure_props",
        "figcaption_props",
        "element_props",
    )

    img_props: PropertySource | None = None
    figure_props: PropertySource | None = None
    figcaption_props: PropertySource | None = None
    element_props: PropertySource | None = None
    strip_paragraph: bool = True
    img_props_scope: Literal["first", "all"] = "first"

    def __post_init__(self) -> None:
        if self.img_props_scope not in ("first", "all"):
            raise ConfigError(
                self.family,
                f"The `img_props_scope` must be 'first' or 'all', got {self.img_props_scope!r}.",
            )


@dataclass(frozen=True, slots=True)
class VideoConfig(FamilyConfig):
    """Options for ``::video[-<platform>]`` leaves.

    Attributes:
        iframe_props: Properties for the iframe
        platforms: Platform name to embed URL template (``{id}`` placeholder);
            merged over the built-in youtube/bilibili/vimeo templates
        default_title: Title used when the directive has no label
        wrap: Render a ``div`` wrapping the iframe instead of a bare iframe

    """

    family: ClassVar[str] = "video"
    source_fields: ClassVar[tuple[str, ...]] = ("iframe_props",)

    iframe_props: PropertySource | None = None
    platforms: Mapping[str, str] = field(default_factory=lambda: DEFAULT_PLATFORMS)
    default_title: str = "Video Player"
    wrap: bool = False

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> Self:
        if isinstance(options, cls):
            return options
        options = dict(options or {})
        user_platforms = options.get("platforms") or {}
        if "url" in user_platforms:
            raise ConfigError(
                cls.family, "Invalid `video` directive config. The `url` is reserved."
            )
        options["platforms"] = MappingProxyType({**DEFAULT_PLATFORMS, **user_platforms})
        config = super(VideoConfig, cls).from_dict(options)
        logger.debug("video platforms: %s", ", ".join(config.platforms))
        return config

    def __post_init__(self) -> None:
        for name, template in self.platforms.items():
            if "{id}" not in template:
                raise ConfigError(
                    self.family,
                    f"The template for the video platform '{name}' has no `{{id}}` placeholder.",
                )


@dataclass(frozen=True, slots=True)
class LinkConfig(FamilyConfig):
    """Options for ``:link`` text directives.

    Attributes:
        a_props: Properties for the anchor
        icon_props: Properties for the icon element
        favicon_source_url: Favicon service template (``{domain}`` placeholder)
        icon_element: ``"span"`` (background image) or ``"img"``

    """

    family: ClassVar[str] = "link"
    source_fields: ClassVar[tuple[str, ...]] = ("a_props", "icon_props")

    a_props: PropertySource | None = None
    icon_props: PropertySource | None = None
    favicon_source_url: str = DEFAULT_FAVICON_SOURCE
    icon_element: Literal["span", "img"] = "span"

    def __post_init__(self) -> None:
        if "{domain}" not in self.favicon_source_url:
            raise ConfigError(
                self.family,
                "The `favicon_source_url` must contain a `{domain}` placeholder.",
            )
        if self.icon_element not in ("span", "img"):
            raise ConfigError(
                self.family,
                f"The `icon_element` must be 'span' or 'img', got {self.icon_element!r}.",
            )


@dataclass(frozen=True, slots=True)
class BadgeConfig(FamilyConfig):
    """Options for ``:badge[-<type>]`` text directives.

    Attributes:
        span_props: Properties for every badge span
        presets: Badge type to preset; merged over the built-in presets
        default_color: Color used when neither the directive nor its preset sets one

    """

    family: ClassVar[str] = "badge"
    source_fields: ClassVar[tuple[str, ...]] = ("span_props",)

    span_props: PropertySource | None = None
    presets: Mapping[str, BadgePreset] = field(default_factory=lambda: DEFAULT_BADGE_PRESETS)
    default_color: str = DEFAULT_BADGE_COLOR

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> Self:
        if isinstance(options, cls):
            return options
        options = dict(options or {})
        user_presets = {
            name: BadgePreset.from_value(preset)
            for name, preset in (options.get("presets") or {}).items()
        }
        options["presets"] = MappingProxyType({**DEFAULT_BADGE_PRESETS, **user_presets})
        config = super(BadgeConfig, cls).from_dict(options)
        logger.debug("badge presets: %s", ", ".join(config.presets))
        return config

    def __post_init__(self) -> None:
        colors = {"default_color": self.default_color}
        colors.update(
            {f"presets.{name}.color": preset.color for name, preset in self.presets.items()}
        )
        for where, color in colors.items():
            if not color:
                continue
            try:
                split_color_pair(color)
            except ValueError as e:
                raise ConfigError(self.family, f"Invalid `{where}`. {e}") from e


@dataclass(frozen=True, slots=True)
class SugarConfig:
    """Complete configuration for one processing run.

    Attributes:
        class_prefix: Prefix of the default class names (``rds-badge``, ...)
        image: Image family options
        video: Video family options
        link: Link family options
        badge: Badge family options

    """

    class_prefix: str = "rds"
    image: ImageConfig = field(default_factory=ImageConfig)
    video: VideoConfig = field(default_factory=VideoConfig)
    link: LinkConfig = field(default_factory=LinkConfig)
    badge: BadgeConfig = field(default_factory=BadgeConfig)

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> SugarConfig:
        """Create SugarConfig from user options.

        Each family key holds a mapping of that family's options; unknown
        top-level keys are silently ignored.

        Raises:
            ConfigError: If any family option is invalid
        """
        options = options or {}
        kwargs: dict[str, Any] = {}
        if "class_prefix" in options:
            kwargs["class_prefix"] = options["class_prefix"]
        kwargs["image"] = ImageConfig.from_dict(options.get("image"))
        kwargs["video"] = VideoConfig.from_dict(options.get("video"))
        kwargs["link"] = LinkConfig.from_dict(options.get("link"))
        kwargs["badge"] = BadgeConfig.from_dict(options.get("badge"))
        return cls(**kwargs)
