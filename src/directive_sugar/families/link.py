"""Link family: ``:link[text]{id=... url=... img=... tab=...}``.

The ``id`` attribute is classified, first match wins:

- ``github-acct``: ``@octocat``
- ``github-repo``: ``withastro/astro``
- ``npm-pkg``: ``remark-directive`` or ``@scope/pkg``
- ``custom-url``: ``https://example.com/docs``

and rendered as an anchor with a leading icon (GitHub avatar or favicon):

    :link{id=@octocat}
    → <a data-link="github-acct" href="https://github.com/octocat" class="rds-link">
        <span style="background-image: url(https://github.com/octocat.png)"></span>octocat</a>

``id``, ``url``, ``img`` and ``tab`` are consumed; every other attribute
is forwarded to the anchor.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar, Literal

from directive_sugar.families.protocol import first_text, invalid, require_kind
from directive_sugar.matcher import build_pattern
from directive_sugar.nodes import Element, RenderTarget, Text
from directive_sugar.properties import merge_properties, resolve_source
from directive_sugar.utils.text import shorten_url, url_domain

if TYPE_CHECKING:
    from directive_sugar.config import LinkConfig
    from directive_sugar.nodes import Directive, DirectiveKind, Node

type LinkType = Literal["github-acct", "github-repo", "npm-pkg", "custom-url"]

CUSTOM_URL_RE = re.compile(r"^(?:https?://)?(?:[\w-]+\.)+[a-z]{2,}(?:/[^\s]*)?$", re.ASCII)
GITHUB_ACCT_RE = re.compile(r"^@[a-zA-Z\d](?!.*--)[\w-]{0,37}[a-zA-Z\d]$", re.ASCII)
GITHUB_REPO_RE = re.compile(r"^([a-zA-Z\d](?!.*--)[\w-]{0,37}[a-zA-Z\d])/.*$", re.ASCII)
NPM_PKG_RE = re.compile(r"^(?=.{1,214}$)(?:@[a-z0-9][a-z0-9._-]*/)?[a-z0-9][a-z0-9._-]*$")
TAB_ORG_RE = re.compile(r"^org-(\w+)$", re.ASCII)

GITHUB_TABS: frozenset[str] = frozenset(
    (
        "repositories",
        "projects",
        "packages",
        "stars",
        "sponsoring",
        "sponsors",
        "org-repositories",
        "org-projects",
        "org-packages",
        "org-sponsoring",
        "org-people",
    )
)
NPM_TABS: frozenset[str] = frozenset(("readme", "code", "dependencies", "dependents", "versions"))

NPM_DOMAIN = "www.npmjs.com"

CONSUMED_ATTRIBUTES = frozenset(("id", "url", "img", "tab"))


def classify(link_id: str) -> LinkType | None:
    """Classify a link ``id``; None when no grammar accepts it."""
    if GITHUB_ACCT_RE.match(link_id):
        return "github-acct"
    if GITHUB_REPO_RE.match(link_id):
        return "github-repo"
    if NPM_PKG_RE.match(link_id):
        return "npm-pkg"
    if CUSTOM_URL_RE.match(link_id):
        return "custom-url"
    return None


class LinkResolver:
    """Resolver for ``:link`` text directives.

    Thread Safety:
        Stateless beyond the frozen config. Safe for concurrent use.
    """

    family: ClassVar[str] = "link"
    kind: ClassVar[DirectiveKind] = "text"

    __slots__ = ("class_name", "config", "pattern")

    def __init__(self, config: LinkConfig, class_prefix: str = "rds") -> None:
        self.config = config
        self.class_name = f"{class_prefix}-{self.family}"
        self.pattern = build_pattern(self.family, config.alias, subtyped=False)

    def resolve(self, node: Directive, match: re.Match[str]) -> RenderTarget:
        require_kind(node, self.family, self.kind)

        attributes = node.attributes
        link_id = attributes.get("id")
        if not link_id:
            raise invalid(node, self.family, "The `id` is missing.")
        link_type = classify(link_id)
        if link_type is None:
            raise invalid(node, self.family, "The `id` is invalid.")

        tab = attributes.get("tab") or None
        if tab is not None and not self._tab_allowed(link_type, tab):
            raise invalid(node, self.family, "The `tab` is invalid.")

        try:
            href, icon = self._derive(link_id, link_type, tab, attributes.get("url"))
        except ValueError as e:
            raise invalid(node, self.family, "The `url` is invalid.") from e
        icon = attributes.get("img") or icon

        text = first_text(node.children)
        if text is None:
            match link_type:
                case "github-acct":
                    text = link_id[1:]
                case "custom-url":
                    text = shorten_url(link_id)
                case _:
                    text = link_id

        local = {k: v for k, v in attributes.items() if k not in CONSUMED_ATTRIBUTES}
        properties = merge_properties(
            {"className": [self.class_name]},
            resolve_source(self.config.a_props, node),
            {"data-link": link_type, "href": href},
            local,
        )

        children: tuple[Node, ...] = (
            self._icon(node, icon),
            Text(location=node.location, content=text),
        )
        return RenderTarget(tag="a", properties=properties, children=children)

    def _tab_allowed(self, link_type: LinkType, tab: str) -> bool:
        match link_type:
            case "github-acct":
                return tab in GITHUB_TABS
            case "npm-pkg":
                return tab in NPM_TABS
            case _:
                return tab in GITHUB_TABS or tab in NPM_TABS

    def _derive(
        self, link_id: str, link_type: LinkType, tab: str | None, url: str | None
    ) -> tuple[str, str]:
        """Return ``(href, icon)`` for a classified id."""
        match link_type:
            case "github-acct":
                acct = link_id[1:]
                if url:
                    href = url
                elif tab is None:
                    href = f"https://github.com/{acct}"
                elif org_tab := TAB_ORG_RE.match(tab):
                    href = f"https://github.com/orgs/{acct}/{org_tab.group(1)}"
                else:
                    href = f"https://github.com/{acct}?tab={tab}"
                return href, f"https://github.com/{acct}.png"
            case "github-repo":
                owner = GITHUB_REPO_RE.match(link_id).group(1)  # type: ignore[union-attr]
                return url or f"https://github.com/{link_id}", f"https://github.com/{owner}.png"
            case "npm-pkg":
                href = url or f"https://www.npmjs.com/package/{link_id}"
                if not url and tab:
                    href = f"{href}?activeTab={tab}"
                return href, self._favicon(NPM_DOMAIN)
            case _:
                href = url or link_id
                return href, self._favicon(url_domain(href))

    def _favicon(self, domain: str) -> str:
        return self.config.favicon_source_url.replace("{domain}", domain)

    def _icon(self, node: Directive, icon: str) -> Element:
        icon_props = resolve_source(self.config.icon_props, node)
        if self.config.icon_element == "img":
            properties = merge_properties({"src": icon}, icon_props)
            properties.setdefault("alt", "")
        else:
            properties = merge_properties({"style": f"background-image: url({icon})"}, icon_props)
        return Element(
            location=node.location,
            tag=self.config.icon_element,
            properties=properties,
        )
