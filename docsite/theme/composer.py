"""Non-destructive theme composition.

A :class:`BaseTheme` is a pure render function plus the Jinja environment it
renders with and the names of the slots it exposes. :class:`ThemeComposer`
layers a derived theme over it by binding slot renderers and registering app
helpers on an overlay environment; the base theme itself is never touched.

Examples
--------
>>> from docsite.theme import ThemeComposer, default_theme
>>> composed = (
...     ThemeComposer(default_theme())
...     .bind("doc-after", lambda ctx: "<p>Thanks for reading</p>")
...     .compose()
... )
>>> composed.collisions
()
"""

from __future__ import annotations

import dataclasses as dc
import logging
import types
import typing as typ
import warnings

from jinja2.utils import LRUCache

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment

    from ..config.models import NavItem, SidebarSection, SiteConfig

logger = logging.getLogger(__name__)

EMPTY_SLOTS: types.MappingProxyType[str, SlotRenderer] = types.MappingProxyType({})
_OVERLAY_CACHE_SIZE = 400


class SlotCollisionWarning(UserWarning):
    """Emitted when a slot is bound more than once; the later binding wins."""


@dc.dataclass(frozen=True, slots=True)
class LayoutContext:
    """Everything a layout needs to render the chrome of one page."""

    site: SiteConfig
    path: str
    title: str
    content_html: str
    nav: tuple[NavItem, ...]
    sidebar: tuple[SidebarSection, ...]


SlotRenderer = typ.Callable[[LayoutContext], str]
AppEnhancer = typ.Callable[["Environment"], None]
BaseRender = typ.Callable[
    [LayoutContext, "cabc.Mapping[str, SlotRenderer]", "Environment"], str
]


@dc.dataclass(frozen=True, slots=True)
class BaseTheme:
    """A base layout exposed as a pure render function."""

    name: str
    render: BaseRender
    environment: Environment
    slots: frozenset[str]

    def layout(self, context: LayoutContext) -> str:
        """Render ``context`` with no slot content."""
        return self.render(context, EMPTY_SLOTS, self.environment)


@dc.dataclass(frozen=True, slots=True)
class SlotBinding:
    """Content injected at a named extension point of the base theme."""

    slot: str
    render: SlotRenderer


@dc.dataclass(frozen=True, slots=True)
class ComposedTheme:
    """A derived layout: the base render function plus bound slots."""

    base: BaseTheme
    slots: types.MappingProxyType[str, SlotRenderer]
    environment: Environment
    collisions: tuple[str, ...] = ()
    unknown_slots: tuple[str, ...] = ()

    def layout(self, context: LayoutContext) -> str:
        """Render ``context`` through the base theme with bound slot content."""
        return self.base.render(context, self.slots, self.environment)

    @property
    def warnings(self) -> tuple[str, ...]:
        """Return human-readable descriptions of non-fatal authoring problems."""
        messages = [
            f"slot {slot!r} is bound more than once; the last binding wins"
            for slot in self.collisions
        ]
        messages.extend(
            f"slot {slot!r} is not exposed by theme {self.base.name!r}"
            for slot in self.unknown_slots
        )
        return tuple(messages)


class ThemeComposer:
    """Collect slot bindings and app enhancers, then compose a derived theme."""

    def __init__(self, base: BaseTheme) -> None:
        """Start a composition over ``base``, which is never modified."""
        self.base = base
        self._bindings: list[SlotBinding] = []
        self._enhancers: list[AppEnhancer] = []

    def bind(self, slot: str, render: SlotRenderer) -> ThemeComposer:
        """Bind ``render`` to ``slot``; a repeated slot replaces the earlier one.

        Raises
        ------
        ValueError
            If ``slot`` is empty.
        """
        name = slot.strip()
        if not name:
            msg = "Slot bindings require a slot name."
            raise ValueError(msg)
        if any(binding.slot == name for binding in self._bindings):
            message = f"slot {name!r} is bound more than once; the last binding wins"
            logger.warning(message)
            warnings.warn(message, SlotCollisionWarning, stacklevel=2)
        self._bindings.append(SlotBinding(slot=name, render=render))
        return self

    def bind_all(self, bindings: cabc.Iterable[SlotBinding]) -> ThemeComposer:
        """Bind every entry of ``bindings`` in order."""
        for binding in bindings:
            self.bind(binding.slot, binding.render)
        return self

    def enhance_app(self, enhancer: AppEnhancer) -> ThemeComposer:
        """Register a step that adds globals, filters, or tests to the app."""
        self._enhancers.append(enhancer)
        return self

    def fork(self) -> ThemeComposer:
        """Return an independent composer holding the same declarations."""
        clone = ThemeComposer(self.base)
        clone._bindings = list(self._bindings)
        clone._enhancers = list(self._enhancers)
        return clone

    def compose(self) -> ComposedTheme:
        """Return the composed theme for the bindings declared so far."""
        table: dict[str, SlotRenderer] = {}
        collisions: list[str] = []
        for binding in self._bindings:
            if binding.slot in table and binding.slot not in collisions:
                collisions.append(binding.slot)
            table[binding.slot] = binding.render
        unknown = [slot for slot in table if slot not in self.base.slots]
        for slot in unknown:
            logger.warning(
                "slot %r is not exposed by theme %r", slot, self.base.name
            )

        environment = derive_environment(self.base.environment)
        for enhancer in self._enhancers:
            enhancer(environment)
        return ComposedTheme(
            base=self.base,
            slots=types.MappingProxyType(table),
            environment=environment,
            collisions=tuple(collisions),
            unknown_slots=tuple(unknown),
        )


def derive_environment(base: Environment) -> Environment:
    """Return an overlay of ``base`` whose registries can change independently.

    ``Environment.overlay`` shares the globals, filters, and tests dictionaries
    and the template cache with its parent, so those are copied here.
    """
    overlay = base.overlay()
    overlay.globals = dict(base.globals)
    overlay.filters = dict(base.filters)
    overlay.tests = dict(base.tests)
    overlay.cache = LRUCache(_OVERLAY_CACHE_SIZE)
    return overlay


__all__ = [
    "AppEnhancer",
    "BaseRender",
    "BaseTheme",
    "ComposedTheme",
    "EMPTY_SLOTS",
    "LayoutContext",
    "SlotBinding",
    "SlotCollisionWarning",
    "SlotRenderer",
    "ThemeComposer",
    "derive_environment",
]
