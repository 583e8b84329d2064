"""Cyclopts CLI entrypoint for validating and inspecting docsite declarations.

The ``docsite`` console script defined here loads ``config/site.yaml`` once,
reports every configuration problem in a single pass, and exposes the
resolved navigation, sidebar, and page chrome for inspection. Typical usage is
``docsite check`` in CI before a site build, and ``docsite sidebar --path``
while authoring the sidebar tree.

Examples
--------
Validate the default configuration:

>>> from docsite.cli import main
>>> main()  # doctest: +SKIP

Show the sidebar resolved for a page:

>>> from docsite.cli import app
>>> app(["sidebar", "--path", "/guide/advanced/logging"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import VERSION_ENV_VAR, VERSION_SIGNAL
from .config import NavDropdown, SiteConfig, SiteConfigError, load_site_config

if typ.TYPE_CHECKING:
    from .config import NavItem

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="docsite", config=cyclopts.config.Env("DOCSITE_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the site declaration", env_var="DOCSITE_CONFIG")
]
VersionOption = typ.Annotated[
    str | None,
    Parameter(
        help="Version string bound into computed navigation labels",
        env_var=VERSION_ENV_VAR,
    ),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log loader details")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config: Path, site_version: str | None) -> SiteConfig:
    """Load the site config, printing every problem and exiting on failure."""
    try:
        return load_site_config(config, signals={VERSION_SIGNAL: site_version})
    except SiteConfigError as exc:
        print(f"{config}: {len(exc.problems)} configuration problem(s)", file=sys.stderr)
        for problem in exc.problems:
            print(f"  - {problem}", file=sys.stderr)
        raise SystemExit(1) from exc


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _nav_payload(items: tuple[NavItem, ...]) -> list[dict[str, typ.Any]]:
    payload: list[dict[str, typ.Any]] = []
    for item in items:
        if isinstance(item, NavDropdown):
            payload.append(
                {
                    "kind": "dropdown",
                    "label": item.label,
                    "items": [dc.asdict(child) for child in item.items],
                }
            )
        else:
            payload.append({"kind": "link", **dc.asdict(item)})
    return payload


@app.command(help="Validate the site declaration and report every problem.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    site_version: VersionOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Load and validate the configuration, printing warnings and problems.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` declaration (overridable via
        ``DOCSITE_CONFIG``).
    site_version : str or None, optional
        Version bound into computed labels; falls back to ``DOCSITE_VERSION``
        and then to the documented placeholder.
    verbose : bool, optional
        Emit debug logging from the loader.

    Raises
    ------
    SystemExit
        With status 1 when the configuration has problems.
    """
    _configure_logging(verbose)
    site = _load(config, site_version)
    for warning in site.warnings:
        print(f"warning: {warning}")
    print(
        f"{_format_path(config)}: ok ({len(site.nav)} nav entries, "
        f"{len(site.sidebar.prefixes)} sidebar prefixes)"
    )


@app.command(help="Print the resolved top navigation as JSON.")
def nav(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    site_version: VersionOption = None,
) -> None:
    """Print the top navigation with computed labels bound."""
    site = _load(config, site_version)
    print(json.dumps(_nav_payload(site.nav)))


@app.command(help="Print the sidebar resolved for a page path as JSON.")
def sidebar(
    *,
    path: typ.Annotated[str, Parameter(help="Page path, e.g. /guide/install")],
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Print the winning prefix and the ordered sections for ``path``."""
    site = _load(config, None)
    payload = {
        "path": path,
        "prefix": site.sidebar.match(path),
        "sections": [dc.asdict(section) for section in site.sidebar_for(path)],
    }
    print(json.dumps(payload))


@app.command(help="Render the page chrome for a path through the composed theme.")
def render(
    *,
    path: typ.Annotated[str, Parameter(help="Page path, e.g. /guide/install")],
    output: typ.Annotated[Path, Parameter(help="Where to write the HTML")],
    title: typ.Annotated[str | None, Parameter(help="Page title")] = None,
    content: typ.Annotated[
        Path | None, Parameter(help="Pre-rendered HTML placed in the content area")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    site_version: VersionOption = None,
) -> None:
    """Write the chrome for ``path`` to ``output``."""
    site = _load(config, site_version)
    content_html = content.read_text(encoding="utf-8") if content else ""
    html = site.render_page(path, title=title, content_html=content_html)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docsite`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
