"""Load and validate the docsite navigation and theme declaration.

This subpackage parses the project's ``site.yaml`` file, builds the top
navigation (binding computed labels such as the version string), expands
sidebar fragments into a prefix-keyed :class:`SidebarTree`, and composes the
theme. The primary entry point is :func:`load_site_config`, which validates
everything in one pass and returns an immutable :class:`SiteConfig` or raises
:class:`SiteConfigError` listing every problem.

Examples
--------
>>> from pathlib import Path
>>> from docsite.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"), signals={"version": "1.2.0"})  # doctest: +SKIP
>>> site.sidebar.match("/guide/advanced/logging")  # doctest: +SKIP
'/guide/advanced/'
"""

from .builder import SiteConfigBuilder, dropdown, head_tag, leaf, link, section
from .loader import build_site_config, load_site_config
from .models import (
    ComputedLabel,
    ConfigProblem,
    EditLinkConfig,
    FooterConfig,
    HeadTag,
    NavDropdown,
    NavItem,
    NavLink,
    SearchConfig,
    SearchProvider,
    SidebarLeaf,
    SidebarSection,
    SidebarTree,
    SiteConfig,
    SiteConfigError,
    SiteMetadata,
    SocialLink,
)
from .navigation import resolve_labels

__all__ = [
    "ComputedLabel",
    "ConfigProblem",
    "EditLinkConfig",
    "FooterConfig",
    "HeadTag",
    "NavDropdown",
    "NavItem",
    "NavLink",
    "SearchConfig",
    "SearchProvider",
    "SidebarLeaf",
    "SidebarSection",
    "SidebarTree",
    "SiteConfig",
    "SiteConfigBuilder",
    "SiteConfigError",
    "SiteMetadata",
    "SocialLink",
    "build_site_config",
    "dropdown",
    "head_tag",
    "leaf",
    "link",
    "load_site_config",
    "resolve_labels",
    "section",
]
