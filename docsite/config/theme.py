"""Theme declarations: slot bindings and app helpers sourced from YAML."""

from __future__ import annotations

import typing as typ
import weakref

from ..theme import ComposedTheme, ThemeComposer, default_theme
from .helpers import _optional_str
from .models import ConfigProblem
from .navigation import signal_values

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment, Template

    from ..theme import BaseTheme, LayoutContext, SlotRenderer


def template_slot(source: str) -> SlotRenderer:
    """Return a slot renderer evaluating ``source`` as a Jinja template.

    The template is compiled once per composed theme environment, so globals
    registered by app enhancers (for example ``build.version``) are available
    to it alongside ``ctx`` and ``site``.
    """
    compiled: weakref.WeakKeyDictionary[Environment, Template] = (
        weakref.WeakKeyDictionary()
    )

    def _render(context: LayoutContext) -> str:
        theme = context.site.theme
        if theme is None:  # pragma: no cover - slots only run inside a theme
            msg = "Template slots require a composed theme."
            raise RuntimeError(msg)
        template = compiled.get(theme.environment)
        if template is None:
            template = theme.environment.from_string(source)
            compiled[theme.environment] = template
        return template.render(ctx=context, site=context.site)

    return _render


def register_globals(values: cabc.Mapping[str, object]) -> typ.Callable[[Environment], None]:
    """Return an app enhancer adding ``values`` to the environment globals."""
    frozen = dict(values)

    def _enhance(environment: Environment) -> None:
        environment.globals.update(frozen)

    return _enhance


def _build_theme(
    payload: object,
    signals: cabc.Mapping[str, str | None],
    problems: list[ConfigProblem],
    *,
    base: BaseTheme | None = None,
) -> ComposedTheme:
    """Compose the site theme from its YAML declaration."""
    composer = ThemeComposer(base or default_theme())
    composer.enhance_app(register_globals({"build": signal_values(signals)}))
    match payload:
        case None:
            return composer.compose()
        case dict() as data:
            pass
        case _:
            problems.append(ConfigProblem("theme", "theme must be a mapping"))
            return composer.compose()

    match data.get("globals"):
        case None:
            pass
        case dict() as values:
            composer.enhance_app(register_globals({str(k): v for k, v in values.items()}))
        case _:
            problems.append(ConfigProblem("theme.globals", "globals must be a mapping"))

    match data.get("slots"):
        case None:
            pass
        case list() as entries:
            for index, entry in enumerate(entries):
                location = f"theme.slots[{index}]"
                match entry:
                    case {"slot": slot, "html": html} if _optional_str(slot):
                        composer.bind(str(slot), template_slot(str(html or "")))
                    case _:
                        problems.append(
                            ConfigProblem(location, "slot bindings require 'slot' and 'html'")
                        )
        case _:
            problems.append(ConfigProblem("theme.slots", "slots must be a list"))
    return composer.compose()


__all__ = ["_build_theme", "register_globals", "template_slot"]
