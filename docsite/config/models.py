"""Typed dataclasses describing docsite navigation and site configuration."""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import types
import typing as typ

from .._constants import DEFAULT_SEARCH_TRANSLATIONS
from .paths import is_absolute_url, normalize_page_path

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..theme import ComposedTheme, LayoutContext


@dc.dataclass(frozen=True, slots=True)
class ConfigProblem:
    """A single structural problem found while validating configuration."""

    location: str
    message: str

    def __str__(self) -> str:
        """Return ``location: message`` for batch reports."""
        return f"{self.location}: {self.message}"


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete.

    Every problem found in one validation pass is carried in ``problems`` so
    operators can fix the whole configuration at once.
    """

    def __init__(self, problems: typ.Iterable[ConfigProblem]) -> None:
        self.problems = tuple(problems)
        lines = [f"{len(self.problems)} configuration problem(s):"]
        lines.extend(f"  - {problem}" for problem in self.problems)
        super().__init__("\n".join(lines))


@dc.dataclass(frozen=True, slots=True)
class ComputedLabel:
    """Label whose text is bound at build time from a named build signal.

    Attributes
    ----------
    source : str
        Name of the build signal supplying the value (for example
        ``"version"``).
    template : str
        Format string applied to the signal value; ``{value}`` is replaced.
    default : str | None
        Value used when the signal is absent. ``None`` falls back to the
        signal's documented placeholder.
    """

    source: str = "version"
    template: str = "{value}"
    default: str | None = None

    def render(self, value: str) -> str:
        """Return the label text for ``value``."""
        return self.template.format(value=value)


Label = str | ComputedLabel


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """A top navigation entry pointing at a single page or URL."""

    label: Label
    target: str
    active_match: str | None = None

    @property
    def external(self) -> bool:
        """Return ``True`` when the target is an absolute URL."""
        return is_absolute_url(self.target)

    def is_active(self, path: str) -> bool:
        """Return ``True`` when ``path`` belongs to this link's area."""
        normalized = normalize_page_path(path)
        if self.active_match:
            return re.search(self.active_match, normalized) is not None
        if self.external:
            return False
        target = self.target.split("#", 1)[0]
        if target.endswith("/"):
            return normalized.startswith(target)
        return normalized == target


@dc.dataclass(frozen=True, slots=True)
class NavDropdown:
    """A labelled top navigation menu holding ordered links."""

    label: Label
    items: tuple[NavLink, ...]

    def is_active(self, path: str) -> bool:
        """Return ``True`` when any child link is active for ``path``."""
        return any(item.is_active(path) for item in self.items)


NavItem = NavLink | NavDropdown


@dc.dataclass(frozen=True, slots=True)
class SidebarLeaf:
    """A single sidebar link to an internal page."""

    label: str
    target: str


@dc.dataclass(frozen=True, slots=True)
class SidebarSection:
    """A titled group of sidebar links.

    ``collapsed`` is the initial UI state only: ``None`` renders a fixed
    section, ``False`` an expanded collapsible one, ``True`` a collapsed one.
    """

    title: str
    items: tuple[SidebarLeaf, ...]
    collapsed: bool | None = None

    def contains(self, path: str) -> bool:
        """Return ``True`` when one of the section's leaves targets ``path``."""
        normalized = normalize_page_path(path)
        return any(
            normalize_page_path(leaf.target.split("#", 1)[0]) == normalized
            for leaf in self.items
        )


@dc.dataclass(frozen=True, slots=True)
class SidebarTree:
    """Ordered mapping from path prefixes to sidebar sections."""

    entries: types.MappingProxyType[str, tuple[SidebarSection, ...]] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )

    @classmethod
    def from_mapping(
        cls, mapping: typ.Mapping[str, typ.Iterable[SidebarSection]]
    ) -> SidebarTree:
        """Build a tree from a plain mapping, freezing section sequences."""
        frozen = {prefix: tuple(sections) for prefix, sections in mapping.items()}
        return cls(entries=types.MappingProxyType(frozen))

    @property
    def prefixes(self) -> tuple[str, ...]:
        """Return the declared prefixes in declaration order."""
        return tuple(self.entries)

    def match(self, path: str) -> str | None:
        """Return the longest declared prefix of ``path``, or ``None``."""
        normalized = normalize_page_path(path)
        best: str | None = None
        for prefix in self.entries:
            if not normalized.startswith(prefix):
                continue
            if best is None or len(prefix) > len(best):
                best = prefix
        return best

    def resolve(self, path: str) -> tuple[SidebarSection, ...]:
        """Return the sections shown for ``path`` (empty when nothing matches)."""
        prefix = self.match(path)
        if prefix is None:
            return ()
        return self.entries[prefix]


class SearchProvider(enum.StrEnum):
    """Search backends the site can be wired to."""

    LOCAL = "local"
    EXTERNAL = "external"


@dc.dataclass(frozen=True, slots=True)
class SearchConfig:
    """Search provider selection and its localized UI strings."""

    provider: SearchProvider = SearchProvider.LOCAL
    translations: types.MappingProxyType[str, str] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )
    options: types.MappingProxyType[str, str] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )

    def text(self, key: str) -> str:
        """Return the UI string for ``key``, falling back to built-in defaults."""
        if self.provider is SearchProvider.LOCAL and key in self.translations:
            return self.translations[key]
        return DEFAULT_SEARCH_TRANSLATIONS.get(key, key)

    def strings(self) -> dict[str, str]:
        """Return every known UI string with overrides applied."""
        keys = list(DEFAULT_SEARCH_TRANSLATIONS)
        if self.provider is SearchProvider.LOCAL:
            keys.extend(key for key in self.translations if key not in keys)
        return {key: self.text(key) for key in keys}


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """An element emitted into the page ``<head>``."""

    tag: str
    attrs: types.MappingProxyType[str, str] = dc.field(
        default_factory=lambda: types.MappingProxyType({})
    )
    content: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """Icon link to an external profile shown in the navigation bar."""

    icon: str
    link: str
    aria_label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class FooterConfig:
    """Footer copy rendered below every page."""

    message: str | None = None
    copyright: str | None = None


@dc.dataclass(frozen=True, slots=True)
class EditLinkConfig:
    """Pattern for the "edit this page" link; ``:path`` is the source path."""

    pattern: str
    text: str = "Edit this page"

    def url_for(self, source_path: str) -> str:
        """Return the edit URL for a page source path."""
        return self.pattern.replace(":path", source_path.lstrip("/"))


@dc.dataclass(frozen=True, slots=True)
class SiteMetadata:
    """Global site metadata used for ``<head>`` emission and page chrome."""

    title: str
    description: str = ""
    base: str = "/"
    lang: str = "en-US"
    head_tags: tuple[HeadTag, ...] = ()
    footer: FooterConfig | None = None
    social_links: tuple[SocialLink, ...] = ()
    edit_link: EditLinkConfig | None = None
    last_updated: bool = False
    logo: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Root aggregate handed to the renderer; validated on construction.

    Raises
    ------
    SiteConfigError
        If any part of the configuration is malformed. All problems are
        reported together.
    """

    metadata: SiteMetadata
    nav: tuple[NavItem, ...] = ()
    sidebar: SidebarTree = dc.field(default_factory=SidebarTree)
    search: SearchConfig = dc.field(default_factory=SearchConfig)
    theme: ComposedTheme | None = None
    source: Path | None = None

    def __post_init__(self) -> None:
        """Validate every part and raise once with all problems found."""
        from .validation import collect_problems

        problems = collect_problems(
            nav=self.nav,
            sidebar=self.sidebar,
            search=self.search,
            metadata=self.metadata,
        )
        if problems:
            raise SiteConfigError(problems)

    @property
    def warnings(self) -> tuple[str, ...]:
        """Return non-fatal authoring warnings recorded while composing."""
        if self.theme is None:
            return ()
        return self.theme.warnings

    def sidebar_for(self, path: str) -> tuple[SidebarSection, ...]:
        """Return the sidebar sections for ``path`` (longest prefix wins)."""
        return self.sidebar.resolve(path)

    def page_context(
        self, path: str, *, title: str | None = None, content_html: str = ""
    ) -> LayoutContext:
        """Return the layout context for rendering the page at ``path``."""
        from ..theme import LayoutContext

        normalized = normalize_page_path(path)
        return LayoutContext(
            site=self,
            path=normalized,
            title=title or self.metadata.title,
            content_html=content_html,
            nav=self.nav,
            sidebar=self.sidebar_for(normalized),
        )

    def render_page(
        self, path: str, *, title: str | None = None, content_html: str = ""
    ) -> str:
        """Render the page chrome for ``path`` through the composed theme."""
        if self.theme is None:
            msg = "No theme composed for this site configuration."
            raise RuntimeError(msg)
        context = self.page_context(path, title=title, content_html=content_html)
        return self.theme.layout(context)


__all__ = [
    "ComputedLabel",
    "ConfigProblem",
    "EditLinkConfig",
    "FooterConfig",
    "HeadTag",
    "Label",
    "NavDropdown",
    "NavItem",
    "NavLink",
    "SearchConfig",
    "SearchProvider",
    "SidebarLeaf",
    "SidebarSection",
    "SidebarTree",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "SocialLink",
]
