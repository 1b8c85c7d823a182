"""Tests for the badge family."""

from typing import Any

import pytest

from directive_sugar.config import DEFAULT_BADGE_COLOR, BadgeConfig, BadgePreset
from directive_sugar.errors import DirectiveKindError, DirectiveValidationError
from directive_sugar.families.badge import BadgeResolver
from directive_sugar.location import SourceLocation
from directive_sugar.nodes import Directive, RenderTarget, Strong, Text

LOC = SourceLocation(lineno=3, col_offset=7)


def _badge(name: str = "badge", label: str | None = None, kind: str = "text", **attributes: str) -> Directive:
    children = (Text(location=LOC, content=label),) if label is not None else ()
    return Directive(location=LOC, kind=kind, name=name, attributes=attributes, children=children)  # type: ignore[arg-type]


def _resolve(node: Directive, **options: Any) -> RenderTarget:
    resolver = BadgeResolver(BadgeConfig.from_dict(options))
    match = resolver.pattern.match(node.name)
    assert match is not None
    return resolver.resolve(node, match)


def _text_of(target: RenderTarget) -> str:
    (child,) = target.children
    assert isinstance(child, Text)
    return child.content


class TestBadgeText:
    def test_label_text(self) -> None:
        target = _resolve(_badge(label="TEXT", color="red"))
        assert target.tag == "span"
        assert _text_of(target) == "TEXT"

    def test_preset_text(self) -> None:
        target = _resolve(_badge("badge-v", label=""), presets={"v": {"text": "VIDEO"}})
        assert _text_of(target) == "VIDEO"
        assert target.properties["data-badge"] == "v"

    def test_preset_text_wins_over_label(self) -> None:
        target = _resolve(_badge("badge-n", label="label"), presets={"n": {"text": "NEW"}})
        assert _text_of(target) == "NEW"

    def test_preset_without_text_uses_label(self) -> None:
        target = _resolve(_badge("badge-n", label="label"), presets={"n": {"color": "red"}})
        assert _text_of(target) == "label"

    def test_built_in_presets(self) -> None:
        assert _text_of(_resolve(_badge("badge-g"))) == "GITHUB"
        assert _text_of(_resolve(_badge("badge-a"))) == "ARTICLE"

    def test_missing_text(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_badge())
        assert exc_info.value.message == (
            "Invalid `badge` directive. The text is missing. Specify it in the `[]` of "
            "`:badge[]{}` or in the `text` field of the `presets` option in the `badge` config."
        )

    def test_label_must_start_with_text(self) -> None:
        node = Directive(
            location=LOC,
            kind="text",
            name="badge",
            attributes={},
            children=(Strong(location=LOC, children=(Text(location=LOC, content="x"),)),),
        )
        with pytest.raises(DirectiveValidationError):
            _resolve(node)

    def test_text_after_leading_markup_ignored(self) -> None:
        node = Directive(
            location=LOC,
            kind="text",
            name="badge",
            attributes={},
            children=(
                Strong(location=LOC, children=(Text(location=LOC, content="A"),)),
                Text(location=LOC, content=" b"),
            ),
        )
        with pytest.raises(DirectiveValidationError, match="The text is missing"):
            _resolve(node)

    def test_preset_text_wins_over_mixed_label(self) -> None:
        node = Directive(
            location=LOC,
            kind="text",
            name="badge-v",
            attributes={},
            children=(
                Strong(location=LOC, children=(Text(location=LOC, content="A"),)),
                Text(location=LOC, content=" b"),
            ),
        )
        assert _resolve(node).children[0].content == "VIDEO"  # type: ignore[attr-defined]


class TestBadgeColors:
    def test_single_color(self) -> None:
        target = _resolve(_badge(label="TEXT", color="red"))
        assert target.properties["style"] == "--badge-color-light:red; --badge-color-dark:red"

    def test_light_dark_pair(self) -> None:
        target = _resolve(_badge(label="TEXT", color="red|blue"))
        assert target.properties["style"] == "--badge-color-light:red; --badge-color-dark:blue"

    def test_pair_is_trimmed(self) -> None:
        target = _resolve(_badge(label="TEXT", color=" red | blue "))
        assert target.properties["style"] == "--badge-color-light:red; --badge-color-dark:blue"

    def test_three_colors_rejected(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_badge(label="TEXT", color="a|b|c"))
        assert exc_info.value.message == (
            "Invalid `badge` directive. The `color` expected one or two color values split by '|'."
        )

    def test_preset_color(self) -> None:
        target = _resolve(_badge("badge-n"), presets={"n": {"text": "NEW", "color": "#fff|#000"}})
        assert target.properties["style"] == "--badge-color-light:#fff; --badge-color-dark:#000"

    def test_attribute_color_wins_over_preset(self) -> None:
        target = _resolve(
            _badge("badge-n", color="green"), presets={"n": {"text": "NEW", "color": "red"}}
        )
        assert target.properties["style"] == "--badge-color-light:green; --badge-color-dark:green"

    def test_default_color(self) -> None:
        light, dark = DEFAULT_BADGE_COLOR.split("|")
        target = _resolve(_badge(label="TEXT"))
        assert target.properties["style"] == (
            f"--badge-color-light:{light}; --badge-color-dark:{dark}"
        )

    def test_configured_default_color(self) -> None:
        target = _resolve(_badge(label="TEXT"), default_color="gray")
        assert target.properties["style"] == "--badge-color-light:gray; --badge-color-dark:gray"

    def test_local_style_appended(self) -> None:
        target = _resolve(_badge(label="TEXT", color="red", style="margin: 0"))
        assert target.properties["style"] == (
            "--badge-color-light:red; --badge-color-dark:red; margin: 0"
        )


class TestBadgeProperties:
    def test_default_class(self) -> None:
        target = _resolve(_badge(label="TEXT"))
        assert target.properties["className"] == ["rds-badge"]

    def test_class_prefix(self) -> None:
        resolver = BadgeResolver(BadgeConfig(), class_prefix="sugar")
        node = _badge(label="TEXT")
        target = resolver.resolve(node, resolver.pattern.match(node.name))  # type: ignore[arg-type]
        assert target.properties["className"] == ["sugar-badge"]

    def test_color_attribute_not_forwarded(self) -> None:
        target = _resolve(_badge(label="TEXT", color="red"))
        assert "color" not in target.properties

    def test_precedence_and_class_union(self) -> None:
        target = _resolve(
            _badge("badge-n", title="local", **{"class": "mine rds-badge"}),
            span_props={"title": "global", "class": "global"},
            presets={"n": {"text": "NEW", "props": {"title": "preset", "className": ["preset"]}}},
        )
        assert target.properties["title"] == "local"
        assert target.properties["className"] == ["rds-badge", "global", "preset", "mine"]

    def test_computed_span_props(self) -> None:
        target = _resolve(
            _badge("badge-v"),
            span_props=lambda node: {"data-name": node.name},
        )
        assert target.properties["data-name"] == "badge-v"

    def test_no_data_badge_without_type(self) -> None:
        assert "data-badge" not in _resolve(_badge(label="TEXT")).properties

    def test_preset_instance_accepted(self) -> None:
        target = _resolve(_badge("badge-x"), presets={"x": BadgePreset(text="X")})
        assert _text_of(target) == "X"


class TestBadgeErrors:
    @pytest.mark.parametrize(("kind", "label"), [("leaf", "leaf"), ("container", "container")])
    def test_kind(self, kind: str, label: str) -> None:
        with pytest.raises(DirectiveKindError) as exc_info:
            _resolve(_badge(label="TEXT", kind=kind))
        assert exc_info.value.message == (
            f"Unexpected {label} directive. Use single colon (`:`) for a `badge` text directive."
        )

    def test_unknown_type(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_badge("badge-unknown", label="TEXT"))
        assert exc_info.value.message == (
            "Invalid `badge` directive. The directive failed to match a valid badge type. "
            "Please check the `presets` option in the `badge` config."
        )

    def test_error_carries_location(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_badge("badge-unknown"))
        assert exc_info.value.location == LOC
        assert exc_info.value.directive_name == "badge-unknown"
        assert str(exc_info.value).startswith("3:7: Invalid `badge` directive.")
