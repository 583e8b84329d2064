"""Theme composition for docsite page chrome.

A base theme is a pure render function exposing named slots; derived themes
are produced with :class:`ThemeComposer`, which binds slot renderers and
registers app helpers without modifying the base.
"""

from .composer import (
    AppEnhancer,
    BaseTheme,
    ComposedTheme,
    LayoutContext,
    SlotBinding,
    SlotCollisionWarning,
    SlotRenderer,
    ThemeComposer,
    derive_environment,
)
from .default import DEFAULT_SLOTS, default_theme, render_default_layout, with_base

__all__ = [
    "DEFAULT_SLOTS",
    "AppEnhancer",
    "BaseTheme",
    "ComposedTheme",
    "LayoutContext",
    "SlotBinding",
    "SlotCollisionWarning",
    "SlotRenderer",
    "ThemeComposer",
    "default_theme",
    "derive_environment",
    "render_default_layout",
    "with_base",
]
