"""Tests for the high-level directive-sugar API."""

import pytest

from directive_sugar.location import SourceLocation
from directive_sugar.nodes import Directive, Document, Node, Paragraph, Text

LOC = SourceLocation(lineno=1, col_offset=1)


def _badge_doc(name: str = "badge", **attributes: str) -> Document:
    badge = Directive(
        location=LOC,
        kind="text",
        name=name,
        attributes=attributes,
        children=(Text(location=LOC, content="NEW"),),
    )
    return Document(location=LOC, children=(Paragraph(location=LOC, children=(badge,)),))


def _first_inline(doc: Document) -> Node:
    return doc.children[0].children[0]  # type: ignore[attr-defined]


class TestResolveFunction:
    """Tests for the resolve() function."""

    def test_resolve_returns_new_document(self) -> None:
        """Resolution leaves the input untouched."""
        from directive_sugar import resolve

        doc = _badge_doc()
        resolved = resolve(doc)
        assert resolved is not doc
        assert not _first_inline(doc).is_resolved  # type: ignore[attr-defined]
        assert _first_inline(resolved).is_resolved  # type: ignore[attr-defined]

    def test_resolve_with_mapping(self) -> None:
        """Options may be passed as a plain mapping."""
        from directive_sugar import resolve

        resolved = resolve(_badge_doc("b"), {"badge": {"alias": "b"}})
        assert _first_inline(resolved).target.tag == "span"  # type: ignore[attr-defined]


class TestRenderFunction:
    """Tests for the render() function."""

    def test_render_badge(self) -> None:
        """Test rendering with a custom class prefix."""
        from directive_sugar import render

        html = render(_badge_doc(color="red"), {"class_prefix": "ui"})
        assert '<span class="ui-badge"' in html
        assert ">NEW</span>" in html

    def test_render_with_config_instance(self) -> None:
        """A ready SugarConfig is accepted as options."""
        from directive_sugar import SugarConfig, render

        html = render(_badge_doc(), SugarConfig(class_prefix="x"))
        assert 'class="x-badge"' in html


class TestDirectiveSugarClass:
    """Tests for the DirectiveSugar facade."""

    def test_call_resolves(self) -> None:
        from directive_sugar import DirectiveSugar

        sugar = DirectiveSugar()
        resolved = sugar(_badge_doc())
        assert isinstance(resolved, Document)
        assert _first_inline(resolved).target.properties["className"] == ["rds-badge"]  # type: ignore[attr-defined]

    def test_config_exposed(self) -> None:
        from directive_sugar import DirectiveSugar

        sugar = DirectiveSugar({"video": {"wrap": True}})
        assert sugar.config.video.wrap is True

    def test_invalid_options(self) -> None:
        """Invalid options fail at construction, before any document."""
        from directive_sugar import ConfigError, DirectiveSugar

        with pytest.raises(ConfigError):
            DirectiveSugar({"image": {"alias": "link"}})
        with pytest.raises(ConfigError):
            DirectiveSugar({"image": {"alias": "x"}, "badge": {"alias": "x"}})

    def test_directive_error_aborts(self) -> None:
        from directive_sugar import DirectiveError, DirectiveSugar

        with pytest.raises(DirectiveError):
            DirectiveSugar().render(_badge_doc("badge-nope"))


class TestPackage:
    def test_version(self) -> None:
        import directive_sugar

        assert directive_sugar.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        import directive_sugar

        for name in directive_sugar.__all__:
            assert hasattr(directive_sugar, name), name
