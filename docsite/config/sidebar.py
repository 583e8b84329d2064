"""Sidebar tree builders, including reusable section fragments."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .helpers import _optional_bool, _optional_str
from .models import ConfigProblem, SidebarLeaf, SidebarSection, SidebarTree

logger = logging.getLogger(__name__)


def _build_fragments(
    payload: object, problems: list[ConfigProblem]
) -> dict[str, SidebarSection]:
    """Build the named sections that sidebar entries may reference."""
    match payload:
        case None:
            return {}
        case dict() as data:
            pass
        case _:
            problems.append(ConfigProblem("fragments", "fragments must be a mapping"))
            return {}
    fragments: dict[str, SidebarSection] = {}
    for name, entry in data.items():
        section = _build_section(entry, f"fragments[{name!r}]", problems)
        if section is not None:
            fragments[str(name)] = section
    return fragments


def _build_sidebar_tree(
    payload: object,
    fragments: typ.Mapping[str, SidebarSection],
    problems: list[ConfigProblem],
    *,
    used: set[str] | None = None,
) -> SidebarTree:
    """Build the prefix-keyed sidebar tree, expanding fragment references.

    Names of the fragments referenced by ``use`` entries are added to
    ``used`` when it is given.
    """
    match payload:
        case None:
            return SidebarTree()
        case dict() as data:
            pass
        case _:
            problems.append(ConfigProblem("sidebar", "sidebar must be a mapping"))
            return SidebarTree()

    tree: dict[str, list[SidebarSection]] = {}
    for prefix, entries in data.items():
        location = f"sidebar[{prefix!r}]"
        if not isinstance(entries, list):
            problems.append(ConfigProblem(location, "expected a list of sections"))
            continue
        sections: list[SidebarSection] = []
        for index, entry in enumerate(entries):
            entry_location = f"{location}[{index}]"
            match entry:
                case {"use": name, **overrides}:
                    if used is not None:
                        used.add(str(name))
                    section = _use_fragment(
                        str(name), overrides, fragments, entry_location, problems
                    )
                case _:
                    section = _build_section(entry, entry_location, problems)
            if section is not None:
                sections.append(section)
        tree[str(prefix)] = sections
    logger.debug("built sidebar tree with prefixes %s", list(tree))
    return SidebarTree.from_mapping(tree)


def _use_fragment(
    name: str,
    overrides: typ.Mapping[str, object],
    fragments: typ.Mapping[str, SidebarSection],
    location: str,
    problems: list[ConfigProblem],
) -> SidebarSection | None:
    """Return a fragment section, applying ``title``/``collapsed`` overrides."""
    try:
        section = fragments[name]
    except KeyError:
        known = ", ".join(sorted(fragments)) or "none"
        problems.append(
            ConfigProblem(location, f"unknown fragment {name!r} (known: {known})")
        )
        return None
    title = _optional_str(overrides.get("title"))
    if title is not None:
        section = dc.replace(section, title=title)
    if "collapsed" in overrides:
        collapsed = _optional_bool(
            overrides["collapsed"], f"{location}.collapsed", problems
        )
        section = dc.replace(section, collapsed=collapsed)
    return section


def _build_section(
    payload: object, location: str, problems: list[ConfigProblem]
) -> SidebarSection | None:
    """Build one titled sidebar section from its YAML mapping."""
    match payload:
        case {"title": title, **rest}:
            pass
        case _:
            problems.append(ConfigProblem(location, "sections require a 'title'"))
            return None
    collapsed = _optional_bool(rest.get("collapsed"), f"{location}.collapsed", problems)
    return SidebarSection(
        title=str(title or ""),
        items=_build_leaves(rest.get("items"), location, problems),
        collapsed=collapsed,
    )


def _build_leaves(
    entries: object, location: str, problems: list[ConfigProblem]
) -> tuple[SidebarLeaf, ...]:
    """Build the ordered links of a sidebar section."""
    match entries:
        case None:
            return ()
        case list() as items:
            iterable = items
        case _:
            problems.append(ConfigProblem(f"{location}.items", "items must be a list"))
            return ()
    leaves: list[SidebarLeaf] = []
    for index, entry in enumerate(iterable):
        leaf_location = f"{location}.items[{index}]"
        match entry:
            case {"label": label, "link": link, **_rest}:
                leaves.append(SidebarLeaf(label=str(label or ""), target=str(link or "")))
            case _:
                problems.append(
                    ConfigProblem(leaf_location, "sidebar links require 'label' and 'link'")
                )
    return tuple(leaves)


__all__ = ["_build_fragments", "_build_sidebar_tree"]
