"""Batch validation for assembled site configuration parts.

Validation never stops at the first failure: each checker appends
:class:`ConfigProblem` entries to a shared list so the caller can report every
offending entry in one pass.
"""

from __future__ import annotations

import re
import typing as typ

from .models import (
    ComputedLabel,
    ConfigProblem,
    NavDropdown,
    NavLink,
    SearchConfig,
    SearchProvider,
    SidebarSection,
    SidebarTree,
    SiteMetadata,
)
from .navigation import template_problem
from .paths import is_absolute_url, is_valid_prefix, is_valid_target

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import NavItem


def collect_problems(
    *,
    nav: cabc.Sequence[NavItem],
    sidebar: SidebarTree,
    search: SearchConfig,
    metadata: SiteMetadata,
    fragments: cabc.Mapping[str, SidebarSection] | None = None,
) -> list[ConfigProblem]:
    """Return every structural problem found in the configuration parts.

    ``fragments`` holds named sections that no sidebar prefix references;
    they are checked where they are declared.
    """
    problems: list[ConfigProblem] = []
    _check_nav(nav, problems)
    _check_sidebar(sidebar, problems)
    for name, section in (fragments or {}).items():
        _check_section(section, f"fragments[{name!r}]", problems)
    _check_search(search, problems)
    _check_metadata(metadata, problems)
    return problems


def _check_label(label: object, location: str, problems: list[ConfigProblem]) -> None:
    if isinstance(label, ComputedLabel):
        problem = template_problem(label.template)
        if problem is not None:
            problems.append(ConfigProblem(f"{location}.template", problem))
            return
    if not isinstance(label, str):
        problems.append(
            ConfigProblem(location, f"computed label {label!r} was never resolved")
        )
    elif not label.strip():
        problems.append(ConfigProblem(location, "label must not be empty"))


def _check_nav_link(
    link: NavLink, location: str, problems: list[ConfigProblem]
) -> None:
    _check_label(link.label, f"{location}.label", problems)
    if not is_valid_target(link.target):
        problems.append(
            ConfigProblem(
                f"{location}.target",
                f"{link.target!r} is neither an internal path nor an absolute URL",
            )
        )
    if link.active_match is not None:
        try:
            re.compile(link.active_match)
        except re.error as exc:
            problems.append(
                ConfigProblem(
                    f"{location}.active_match", f"invalid regular expression: {exc}"
                )
            )


def _check_nav(nav: cabc.Sequence[NavItem], problems: list[ConfigProblem]) -> None:
    for index, item in enumerate(nav):
        location = f"nav[{index}]"
        match item:
            case NavLink():
                _check_nav_link(item, location, problems)
            case NavDropdown(label=label, items=items):
                _check_label(label, f"{location}.label", problems)
                if not items:
                    problems.append(
                        ConfigProblem(
                            f"{location}.items", "dropdown requires at least one link"
                        )
                    )
                for child_index, child in enumerate(items):
                    child_location = f"{location}.items[{child_index}]"
                    if not isinstance(child, NavLink):
                        problems.append(
                            ConfigProblem(
                                child_location, "dropdown entries must be links"
                            )
                        )
                        continue
                    _check_nav_link(child, child_location, problems)
            case _:
                problems.append(
                    ConfigProblem(location, f"unsupported nav entry {item!r}")
                )


def _check_sidebar(sidebar: SidebarTree, problems: list[ConfigProblem]) -> None:
    for prefix, sections in sidebar.entries.items():
        location = f"sidebar[{prefix!r}]"
        if not is_valid_prefix(prefix):
            problems.append(
                ConfigProblem(
                    location, "prefix must start and end with '/' and hold no spaces"
                )
            )
        for section_index, section in enumerate(sections):
            _check_section(section, f"{location}[{section_index}]", problems)


def _check_section(
    section: SidebarSection, location: str, problems: list[ConfigProblem]
) -> None:
    if not section.title.strip():
        problems.append(ConfigProblem(f"{location}.title", "title must not be empty"))
    for leaf_index, leaf in enumerate(section.items):
        leaf_location = f"{location}.items[{leaf_index}]"
        if not leaf.label.strip():
            problems.append(
                ConfigProblem(f"{leaf_location}.label", "label must not be empty")
            )
        if not is_valid_target(leaf.target, allow_external=False):
            problems.append(
                ConfigProblem(
                    f"{leaf_location}.target",
                    f"{leaf.target!r} is not an internal path",
                )
            )


def _check_search(search: SearchConfig, problems: list[ConfigProblem]) -> None:
    if not isinstance(search.provider, SearchProvider):
        problems.append(
            ConfigProblem("search.provider", f"unknown provider {search.provider!r}")
        )
    for key, value in search.translations.items():
        if not isinstance(value, str):
            problems.append(
                ConfigProblem(
                    f"search.translations[{key!r}]", "translation must be text"
                )
            )


def _check_metadata(metadata: SiteMetadata, problems: list[ConfigProblem]) -> None:
    if not metadata.title.strip():
        problems.append(ConfigProblem("site.title", "title must not be empty"))
    if not is_valid_prefix(metadata.base):
        problems.append(
            ConfigProblem("site.base", "base path must start and end with '/'")
        )
    for index, head_tag in enumerate(metadata.head_tags):
        if not head_tag.tag.strip():
            problems.append(
                ConfigProblem(f"site.head[{index}].tag", "tag name must not be empty")
            )
    for index, social in enumerate(metadata.social_links):
        if not is_absolute_url(social.link):
            problems.append(
                ConfigProblem(
                    f"site.social_links[{index}].link",
                    f"{social.link!r} is not an absolute URL",
                )
            )
    if metadata.edit_link is not None and ":path" not in metadata.edit_link.pattern:
        problems.append(
            ConfigProblem("site.edit_link.pattern", "pattern must contain ':path'")
        )


__all__ = ["collect_problems"]
