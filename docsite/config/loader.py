"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ

from ruamel.yaml import YAML

from .._constants import VERSION_SIGNAL
from .metadata import _build_search_config, _build_site_metadata
from .models import ConfigProblem, SiteConfig, SiteConfigError
from .navigation import _build_nav_items, resolve_labels
from .sidebar import _build_fragments, _build_sidebar_tree
from .theme import _build_theme
from .validation import collect_problems

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from ..theme import BaseTheme

logger = logging.getLogger(__name__)


def load_site_config(
    path: Path,
    *,
    signals: cabc.Mapping[str, str | None] | None = None,
    base_theme: BaseTheme | None = None,
) -> SiteConfig:
    """Load the YAML declaration describing navigation, sidebar, and theme.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site declaration (for example,
        ``config/site.yaml``).
    signals : Mapping[str, str | None], optional
        Build-time values bound into computed labels, such as
        ``{"version": "1.4.0"}``. Missing values fall back to each label's
        default or the documented placeholder.
    base_theme : BaseTheme, optional
        Theme the declared slots are composed over. Defaults to
        :func:`docsite.theme.default_theme`.

    Returns
    -------
    SiteConfig
        The validated, immutable site configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If any entry is malformed. Every problem found is reported at once.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docsite.config import load_site_config
    >>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> [section.title for section in site.sidebar_for("/guide/spells")]  # doctest: +SKIP
    ['Introduction', 'Spells']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    logger.debug("loaded site declaration from %s", path)
    return build_site_config(
        dict(loaded), signals=signals, base_theme=base_theme, source=path
    )


def build_site_config(
    raw: cabc.Mapping[str, typ.Any],
    *,
    signals: cabc.Mapping[str, str | None] | None = None,
    base_theme: BaseTheme | None = None,
    source: Path | None = None,
) -> SiteConfig:
    """Build a validated :class:`SiteConfig` from a parsed declaration mapping.

    Shape problems met while parsing and semantic problems found by
    validation are merged into a single :class:`SiteConfigError`.
    """
    bound = {VERSION_SIGNAL: None, **(signals or {})}
    problems: list[ConfigProblem] = []

    metadata = _build_site_metadata(raw.get("site"), problems)
    nav = resolve_labels(_build_nav_items(raw.get("nav"), problems), bound)
    fragments = _build_fragments(raw.get("fragments"), problems)
    used: set[str] = set()
    sidebar = _build_sidebar_tree(raw.get("sidebar"), fragments, problems, used=used)
    unused = {name: section for name, section in fragments.items() if name not in used}
    if unused:
        logger.debug("fragments never referenced by the sidebar: %s", sorted(unused))
    search = _build_search_config(raw.get("search"), problems)
    theme = _build_theme(raw.get("theme"), bound, problems, base=base_theme)

    problems.extend(
        collect_problems(
            nav=nav,
            sidebar=sidebar,
            search=search,
            metadata=metadata,
            fragments=unused,
        )
    )
    if problems:
        unique = list(dict.fromkeys(problems))
        logger.debug("site declaration has %d problem(s)", len(unique))
        raise SiteConfigError(unique)

    return SiteConfig(
        metadata=metadata,
        nav=nav,
        sidebar=sidebar,
        search=search,
        theme=theme,
        source=source,
    )


__all__ = ["build_site_config", "load_site_config"]
