"""Default base theme rendering the documentation page chrome.

The default theme turns a :class:`~docsite.theme.composer.LayoutContext` into
a complete HTML document: ``<head>`` tags from the site metadata, the top
navigation (links and dropdowns), the resolved sidebar, the pre-rendered page
content, the footer, and the search wiring attributes. Derived themes inject
content at the names listed in :data:`DEFAULT_SLOTS`.

Templates are read from ``docsite/templates`` unless a custom directory is
supplied; Jinja2 runs with autoescape enabled.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from .composer import BaseTheme

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..config.models import SiteMetadata
    from .composer import LayoutContext, SlotRenderer

LAYOUT_TEMPLATE = "layout.jinja"
VOID_TAGS = frozenset({"base", "link", "meta"})
URL_ATTRS = frozenset({"href", "src"})

DEFAULT_SLOTS: tuple[str, ...] = (
    "layout-top",
    "layout-bottom",
    "nav-bar-title-before",
    "nav-bar-title-after",
    "nav-bar-content-after",
    "sidebar-nav-before",
    "sidebar-nav-after",
    "home-hero-before",
    "home-features-after",
    "doc-before",
    "doc-after",
    "doc-footer-before",
)


def default_theme(*, templates_dir: Path | None = None) -> BaseTheme:
    """Return the default base theme.

    Parameters
    ----------
    templates_dir : Path, optional
        Directory containing ``layout.jinja``. Defaults to the packaged
        ``docsite/templates`` directory.

    Returns
    -------
    BaseTheme
        The base theme; compose derived themes over it with
        :class:`~docsite.theme.ThemeComposer`.
    """
    from ..config.models import NavDropdown, NavLink

    directory = templates_dir or Path(__file__).resolve().parents[1] / "templates"
    environment = Environment(
        loader=FileSystemLoader(directory),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    environment.filters["with_base"] = with_base
    environment.tests["dropdown"] = lambda item: isinstance(item, NavDropdown)
    environment.tests["link"] = lambda item: isinstance(item, NavLink)
    return BaseTheme(
        name="default",
        render=render_default_layout,
        environment=environment,
        slots=frozenset(DEFAULT_SLOTS),
    )


def render_default_layout(
    context: LayoutContext,
    slots: cabc.Mapping[str, SlotRenderer],
    environment: Environment,
) -> str:
    """Render the page chrome for ``context``, filling bound ``slots``."""

    def slot(name: str) -> Markup:
        renderer = slots.get(name)
        if renderer is None:
            return Markup("")
        return Markup(renderer(context))

    site = context.site
    template = environment.get_template(LAYOUT_TEMPLATE)
    html = template.render(
        ctx=context,
        metadata=site.metadata,
        search=site.search,
        search_strings=site.search.strings(),
        is_home=context.path in {"/", "/index", "/index.html"},
        edit_url=_edit_url(site.metadata, context.path),
        void_tags=VOID_TAGS,
        url_attrs=URL_ATTRS,
        slot=slot,
    )
    if not html.endswith("\n"):
        html += "\n"
    return html


def with_base(target: str, base: str) -> str:
    """Return the served URL of ``target`` for a site deployed under ``base``.

    Internal paths gain the base; absolute and protocol-relative URLs are
    returned unchanged.

    Examples
    --------
    >>> with_base("/guide/install", "/silentcast/")
    '/silentcast/guide/install'
    >>> with_base("https://github.com/example", "/silentcast/")
    'https://github.com/example'
    >>> with_base("/guide/", "/")
    '/guide/'
    """
    if not target.startswith("/") or target.startswith("//"):
        return target
    return base.rstrip("/") + target


def _edit_url(metadata: SiteMetadata, path: str) -> str | None:
    """Return the edit link for the Markdown source behind ``path``."""
    if metadata.edit_link is None:
        return None
    source = path.strip("/") or "index"
    if path.endswith("/") and path != "/":
        source = f"{source}/index"
    if source.endswith(".html"):
        source = source[: -len(".html")]
    return metadata.edit_link.url_for(f"{source}.md")


__all__ = [
    "DEFAULT_SLOTS",
    "LAYOUT_TEMPLATE",
    "default_theme",
    "render_default_layout",
    "with_base",
]
