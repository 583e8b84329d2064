"""Compose a :class:`SiteConfig` in Python from reusable fragments.

Sections and links are plain immutable values, so one section can be shared
by several sidebar prefixes instead of being copied into each of them.

Examples
--------
>>> from docsite.config.builder import SiteConfigBuilder, link, section
>>> basics = section("Basics", link("Install", "/guide/install"))
>>> site = (
...     SiteConfigBuilder("SilentCast")
...     .nav(link("Guide", "/guide/"))
...     .sidebar("/guide/", basics)
...     .build()
... )
>>> [s.title for s in site.sidebar_for("/guide/install")]
['Basics']
"""

from __future__ import annotations

import dataclasses as dc
import types
import typing as typ

from .._constants import VERSION_SIGNAL
from ..theme import ComposedTheme, ThemeComposer, default_theme
from .models import (
    ComputedLabel,
    HeadTag,
    NavDropdown,
    NavItem,
    NavLink,
    SearchConfig,
    SidebarLeaf,
    SidebarSection,
    SidebarTree,
    SiteConfig,
    SiteMetadata,
)
from .navigation import resolve_labels, signal_values
from .theme import register_globals

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def link(
    label: str | ComputedLabel, target: str, *, active_match: str | None = None
) -> NavLink:
    """Return a navigation link."""
    return NavLink(label=label, target=target, active_match=active_match)


def dropdown(label: str | ComputedLabel, *items: NavLink) -> NavDropdown:
    """Return a navigation dropdown holding ``items`` in order."""
    return NavDropdown(label=label, items=tuple(items))


def leaf(label: str, target: str) -> SidebarLeaf:
    """Return a sidebar link."""
    return SidebarLeaf(label=label, target=target)


def section(
    title: str, *items: SidebarLeaf | NavLink, collapsed: bool | None = None
) -> SidebarSection:
    """Return a sidebar section; navigation links are accepted as leaves."""
    leaves = tuple(
        item if isinstance(item, SidebarLeaf) else SidebarLeaf(str(item.label), item.target)
        for item in items
    )
    return SidebarSection(title=title, items=leaves, collapsed=collapsed)


def head_tag(tag: str, content: str | None = None, **attrs: str) -> HeadTag:
    """Return a ``<head>`` element; underscores in attribute names become dashes."""
    normalized = {name.rstrip("_").replace("_", "-"): value for name, value in attrs.items()}
    return HeadTag(tag=tag, attrs=types.MappingProxyType(normalized), content=content)


class SiteConfigBuilder:
    """Accumulate configuration fragments and build a validated SiteConfig."""

    def __init__(self, title: str, *, description: str = "", base: str = "/") -> None:
        self._metadata = SiteMetadata(title=title, description=description, base=base)
        self._nav: list[NavItem] = []
        self._sidebar: dict[str, list[SidebarSection]] = {}
        self._search = SearchConfig()
        self._composer: ThemeComposer | None = None
        self._theme: ComposedTheme | None = None

    def nav(self, *items: NavItem) -> SiteConfigBuilder:
        """Append top navigation entries in order."""
        self._nav.extend(items)
        return self

    def sidebar(self, prefix: str, *sections: SidebarSection) -> SiteConfigBuilder:
        """Append ``sections`` to the sidebar shown under ``prefix``."""
        self._sidebar.setdefault(prefix, []).extend(sections)
        return self

    def search(self, config: SearchConfig) -> SiteConfigBuilder:
        """Use ``config`` for the search UI."""
        self._search = config
        return self

    def metadata(self, **changes: typ.Any) -> SiteConfigBuilder:
        """Replace metadata fields such as ``head_tags`` or ``footer``."""
        if "head_tags" in changes:
            changes["head_tags"] = tuple(changes["head_tags"])
        if "social_links" in changes:
            changes["social_links"] = tuple(changes["social_links"])
        self._metadata = dc.replace(self._metadata, **changes)
        return self

    def theme(self, theme: ThemeComposer | ComposedTheme) -> SiteConfigBuilder:
        """Use a composer (composed at build time) or an already composed theme."""
        if isinstance(theme, ThemeComposer):
            self._composer, self._theme = theme, None
        else:
            self._composer, self._theme = None, theme
        return self

    def build(
        self, *, signals: cabc.Mapping[str, str | None] | None = None
    ) -> SiteConfig:
        """Resolve computed labels and return the validated configuration.

        Raises
        ------
        SiteConfigError
            If any fragment is malformed; all problems are reported together.
        """
        bound = {VERSION_SIGNAL: None, **(signals or {})}
        nav = resolve_labels(self._nav, bound)
        theme = self._theme
        if theme is None:
            composer = (
                self._composer.fork()
                if self._composer is not None
                else ThemeComposer(default_theme())
            )
            composer.enhance_app(
                register_globals({"build": signal_values(bound)})
            )
            theme = composer.compose()
        return SiteConfig(
            metadata=self._metadata,
            nav=nav,
            sidebar=SidebarTree.from_mapping(self._sidebar),
            search=self._search,
            theme=theme,
        )


__all__ = [
    "SiteConfigBuilder",
    "dropdown",
    "head_tag",
    "leaf",
    "link",
    "section",
]
