"""Tests for the link family."""

from typing import Any

import pytest

from directive_sugar.config import LinkConfig
from directive_sugar.errors import ConfigError, DirectiveKindError, DirectiveValidationError
from directive_sugar.families.link import LinkResolver, classify
from directive_sugar.location import SourceLocation
from directive_sugar.nodes import Directive, Element, RenderTarget, Text

LOC = SourceLocation(lineno=1, col_offset=1)


def _link(label: str | None = None, kind: str = "text", **attributes: str) -> Directive:
    children = (Text(location=LOC, content=label),) if label is not None else ()
    return Directive(location=LOC, kind=kind, name="link", attributes=attributes, children=children)  # type: ignore[arg-type]


def _resolve(node: Directive, **options: Any) -> RenderTarget:
    resolver = LinkResolver(LinkConfig.from_dict(options))
    match = resolver.pattern.match(node.name)
    assert match is not None
    return resolver.resolve(node, match)


def _icon(target: RenderTarget) -> Element:
    icon = target.children[0]
    assert isinstance(icon, Element)
    return icon


def _text_of(target: RenderTarget) -> str:
    text = target.children[1]
    assert isinstance(text, Text)
    return text.content


class TestClassify:
    @pytest.mark.parametrize(
        ("link_id", "expected"),
        [
            ("@octocat", "github-acct"),
            ("@a-b", "github-acct"),
            ("withastro/astro", "github-repo"),
            ("remark-directive", "npm-pkg"),
            ("@astrojs/mdx", "npm-pkg"),
            ("https://example.com/docs", "custom-url"),
            ("example.com", "npm-pkg"),
            ("Example.com/path", "custom-url"),
        ],
    )
    def test_classification(self, link_id: str, expected: str) -> None:
        assert classify(link_id) == expected

    @pytest.mark.parametrize("link_id", ["@a--b", "@-abc", "not a url", "UPPER"])
    def test_invalid(self, link_id: str) -> None:
        assert classify(link_id) is None


class TestGithubAccount:
    def test_plain_profile(self) -> None:
        target = _resolve(_link(id="@octocat"))
        assert target.tag == "a"
        assert target.properties["href"] == "https://github.com/octocat"
        assert target.properties["data-link"] == "github-acct"
        assert _text_of(target) == "octocat"

    def test_avatar(self) -> None:
        icon = _icon(_resolve(_link(id="@octocat")))
        assert icon.tag == "span"
        assert icon.properties["style"] == "background-image: url(https://github.com/octocat.png)"

    def test_user_tab(self) -> None:
        target = _resolve(_link(id="@octocat", tab="stars"))
        assert target.properties["href"] == "https://github.com/octocat?tab=stars"

    def test_org_tab(self) -> None:
        target = _resolve(_link(id="@withastro", tab="org-people"))
        assert target.properties["href"] == "https://github.com/orgs/withastro/people"

    def test_url_override(self) -> None:
        target = _resolve(_link(id="@octocat", tab="stars", url="https://octocat.dev"))
        assert target.properties["href"] == "https://octocat.dev"

    def test_npm_tab_rejected_for_account(self) -> None:
        with pytest.raises(DirectiveValidationError):
            _resolve(_link(id="@octocat", tab="readme"))


class TestGithubRepo:
    def test_repo_url_and_owner_avatar(self) -> None:
        target = _resolve(_link(id="withastro/astro"))
        assert target.properties["href"] == "https://github.com/withastro/astro"
        assert target.properties["data-link"] == "github-repo"
        assert _icon(target).properties["style"] == (
            "background-image: url(https://github.com/withastro.png)"
        )
        assert _text_of(target) == "withastro/astro"


class TestNpmPackage:
    def test_package_page(self) -> None:
        target = _resolve(_link(id="remark-directive"))
        assert target.properties["href"] == "https://www.npmjs.com/package/remark-directive"
        assert target.properties["data-link"] == "npm-pkg"
        assert _icon(target).properties["style"] == (
            "background-image: url(https://www.google.com/s2/favicons?domain=www.npmjs.com&sz=128)"
        )

    def test_active_tab(self) -> None:
        target = _resolve(_link(id="@astrojs/mdx", tab="versions"))
        assert target.properties["href"] == (
            "https://www.npmjs.com/package/@astrojs/mdx?activeTab=versions"
        )

    def test_github_tab_rejected(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_link(id="remark-directive", tab="stars"))
        assert exc_info.value.message == "Invalid `link` directive. The `tab` is invalid."


class TestCustomUrl:
    def test_url_and_favicon(self) -> None:
        target = _resolve(_link(id="https://docs.astro.build/en/getting-started/"))
        assert target.properties["href"] == "https://docs.astro.build/en/getting-started/"
        assert target.properties["data-link"] == "custom-url"
        assert _icon(target).properties["style"] == (
            "background-image: url(https://www.google.com/s2/favicons?domain=docs.astro.build&sz=128)"
        )

    def test_shortened_text(self) -> None:
        target = _resolve(_link(id="https://docs.astro.build/en/getting-started/"))
        assert _text_of(target) == "docs.astro.build/en/getting-sta..."

    def test_label_wins(self) -> None:
        target = _resolve(_link("Astro docs", id="https://docs.astro.build"))
        assert _text_of(target) == "Astro docs"

    def test_custom_favicon_service(self) -> None:
        target = _resolve(
            _link(id="https://example.com"),
            favicon_source_url="https://icons.example.net/{domain}.ico",
        )
        assert _icon(target).properties["style"] == (
            "background-image: url(https://icons.example.net/example.com.ico)"
        )

    def test_img_override(self) -> None:
        target = _resolve(_link(id="https://example.com", img="/logo.png"))
        assert _icon(target).properties["style"] == "background-image: url(/logo.png)"


class TestLinkProperties:
    def test_consumed_attributes_not_forwarded(self) -> None:
        target = _resolve(
            _link(id="@octocat", url="https://x.dev", img="/a.png", tab="stars", target="_blank")
        )
        for key in ("id", "url", "img", "tab"):
            assert key not in target.properties
        assert target.properties["target"] == "_blank"

    def test_default_class_and_a_props(self) -> None:
        target = _resolve(
            _link(id="@octocat", **{"class": "local"}), a_props={"class": "global", "rel": "me"}
        )
        assert target.properties["className"] == ["rds-link", "global", "local"]
        assert target.properties["rel"] == "me"

    def test_icon_props_merged(self) -> None:
        icon = _icon(_resolve(_link(id="@octocat"), icon_props={"className": ["icon"]}))
        assert icon.properties["className"] == ["icon"]
        assert icon.properties["style"].startswith("background-image:")

    def test_img_icon_element(self) -> None:
        icon = _icon(_resolve(_link(id="@octocat"), icon_element="img"))
        assert icon.tag == "img"
        assert icon.properties == {"src": "https://github.com/octocat.png", "alt": ""}


class TestLinkErrors:
    def test_missing_id(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_link("text"))
        assert exc_info.value.message == "Invalid `link` directive. The `id` is missing."

    def test_invalid_id(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_link(id="not a url"))
        assert exc_info.value.message == "Invalid `link` directive. The `id` is invalid."

    def test_invalid_tab(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_link(id="@octocat", tab="followers"))
        assert exc_info.value.message == "Invalid `link` directive. The `tab` is invalid."

    def test_malformed_url_override(self) -> None:
        with pytest.raises(DirectiveValidationError) as exc_info:
            _resolve(_link(id="https://example.com", url="http://[::1"))
        assert exc_info.value.message == "Invalid `link` directive. The `url` is invalid."
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize("kind", ["leaf", "container"])
    def test_kind(self, kind: str) -> None:
        with pytest.raises(DirectiveKindError) as exc_info:
            _resolve(_link(kind=kind, id="@octocat"))
        assert exc_info.value.message == (
            f"Unexpected {kind} directive. Use single colon (`:`) for a `link` text directive."
        )

    def test_favicon_template_requires_domain(self) -> None:
        with pytest.raises(ConfigError):
            LinkConfig.from_dict({"favicon_source_url": "https://icons.example.net/favicon.ico"})

    def test_subtyped_name_not_claimed(self) -> None:
        resolver = LinkResolver(LinkConfig())
        assert resolver.pattern.match("link-github") is None
