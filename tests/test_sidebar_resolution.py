"""Unit tests for sidebar resolution by longest-prefix-match.

These tests cover :meth:`SidebarTree.resolve` and :meth:`SidebarTree.match`:
the most specific prefix wins, unmatched paths resolve to an empty sidebar,
declared order is preserved, and resolution is idempotent.

Usage
-----
Run ``pytest tests/test_sidebar_resolution.py -v``.
"""

from __future__ import annotations

import pytest

from docsite.config import SidebarLeaf, SidebarSection, SidebarTree

SECTION_A = SidebarSection("Section A", (SidebarLeaf("Install", "/guide/installation"),))
SECTION_B = SidebarSection(
    "Section B", (SidebarLeaf("Logging", "/guide/advanced/logging"),), collapsed=True
)
SECTION_ROOT = SidebarSection("Home", (SidebarLeaf("Welcome", "/"),))


@pytest.fixture
def tree() -> SidebarTree:
    """Return a tree whose ``/guide/`` keys nest inside each other."""
    return SidebarTree.from_mapping(
        {"/guide/": [SECTION_A], "/guide/advanced/": [SECTION_B]}
    )


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/guide/advanced/logging", (SECTION_B,)),
        ("/guide/installation", (SECTION_A,)),
        ("/guide/advanced/", (SECTION_B,)),
        ("/guide/", (SECTION_A,)),
        ("guide/installation", (SECTION_A,)),
        ("/guide/advanced/logging#levels", (SECTION_B,)),
    ],
)
def test_longest_prefix_wins(
    tree: SidebarTree, path: str, expected: tuple[SidebarSection, ...]
) -> None:
    """The most specific matching prefix selects the sections."""
    actual = tree.resolve(path)
    assert actual == expected, f"expected {expected!r} for {path!r}, got {actual!r}"


def test_declaration_order_does_not_affect_matching() -> None:
    """A longer prefix wins even when it is declared first."""
    tree = SidebarTree.from_mapping(
        {"/guide/advanced/": [SECTION_B], "/guide/": [SECTION_A]}
    )
    assert tree.match("/guide/advanced/logging") == "/guide/advanced/", (
        "expected the longer prefix regardless of declaration order"
    )


@pytest.mark.parametrize("path", ["/api/cli", "/", "/guide", "/guides/other"])
def test_unmatched_path_resolves_to_empty_sidebar(tree: SidebarTree, path: str) -> None:
    """Paths outside every prefix render no sidebar rather than failing."""
    assert tree.resolve(path) == (), f"expected no sidebar for {path!r}"
    assert tree.match(path) is None, f"expected no matching prefix for {path!r}"


def test_root_prefix_is_a_fallback(tree: SidebarTree) -> None:
    """A ``/`` key catches every path not claimed by a longer prefix."""
    with_root = SidebarTree.from_mapping(
        {"/": [SECTION_ROOT], **{key: list(value) for key, value in tree.entries.items()}}
    )
    assert with_root.resolve("/api/cli") == (SECTION_ROOT,)
    assert with_root.resolve("/guide/installation") == (SECTION_A,)


def test_resolution_is_idempotent(tree: SidebarTree) -> None:
    """Resolving the same path twice yields equal results."""
    first = tree.resolve("/guide/advanced/logging")
    second = tree.resolve("/guide/advanced/logging")
    assert first == second, "expected repeated resolution to be stable"


def test_sections_and_leaves_keep_declared_order() -> None:
    """Reading order is never re-sorted."""
    zebra = SidebarSection(
        "Zebra",
        (SidebarLeaf("Zulu", "/z/zulu"), SidebarLeaf("Alpha", "/z/alpha")),
    )
    alpha = SidebarSection("Alpha", (SidebarLeaf("Beta", "/z/beta"),))
    tree = SidebarTree.from_mapping({"/z/": [zebra, alpha]})

    sections = tree.resolve("/z/alpha")
    assert [section.title for section in sections] == ["Zebra", "Alpha"]
    assert [leaf.label for leaf in sections[0].items] == ["Zulu", "Alpha"]


def test_tree_entries_are_read_only(tree: SidebarTree) -> None:
    """The tree cannot be mutated after construction."""
    with pytest.raises(TypeError):
        tree.entries["/api/"] = ()  # type: ignore[index]


def test_section_contains_reports_active_leaf() -> None:
    """Sections know whether they hold the active page."""
    assert SECTION_B.contains("/guide/advanced/logging")
    assert SECTION_B.contains("guide/advanced/logging#levels")
    assert not SECTION_B.contains("/guide/installation")
