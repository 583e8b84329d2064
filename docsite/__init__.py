"""Navigation, sidebar, search, and theme model for a documentation site.

This package loads the site declaration once, validates it in a single pass,
and exposes the immutable :class:`~docsite.config.SiteConfig` a renderer
reads: the ordered top navigation, sidebar sections resolved by
longest-prefix-match, search wiring, ``<head>`` metadata, and a composed
layout function.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
