"""Top navigation builders and late-bound label resolution."""

from __future__ import annotations

import dataclasses as dc
import logging
import string
import typing as typ

from .._constants import VERSION_PLACEHOLDER, VERSION_SIGNAL
from .helpers import _optional_str
from .models import ComputedLabel, ConfigProblem, NavDropdown, NavItem, NavLink

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

SIGNAL_PLACEHOLDERS: dict[str, str] = {VERSION_SIGNAL: VERSION_PLACEHOLDER}


def template_problem(template: str) -> str | None:
    """Return why ``template`` cannot format a label, or ``None`` when it can.

    Examples
    --------
    >>> template_problem("v{value}") is None
    True
    >>> template_problem("v{version}")
    'unknown placeholder {version}; only {value} is supported'
    """
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as exc:
        return f"invalid template: {exc}"
    names = [field for _, field, _, _ in parsed if field is not None]
    if any("{" in (fmt or "") for _, _, fmt, _ in parsed):
        return "nested placeholders are not supported"
    for name in names:
        if name != "value":
            return f"unknown placeholder {{{name}}}; only {{value}} is supported"
    if not names:
        return "template must contain {value}"
    return None


def signal_values(signals: cabc.Mapping[str, str | None]) -> dict[str, str]:
    """Return known signal values, substituting documented placeholders."""
    values: dict[str, str] = {}
    for key in {**SIGNAL_PLACEHOLDERS, **signals}:
        value = signals.get(key) or SIGNAL_PLACEHOLDERS.get(key)
        if value:
            values[key] = value
    return values


def resolve_label(
    label: str | ComputedLabel, signals: cabc.Mapping[str, str | None]
) -> str | ComputedLabel:
    """Return the literal text for ``label``.

    Literal labels pass through untouched. Computed labels take the signal
    value, then their own default, then the signal's documented placeholder.
    A computed label with none of those, or whose template cannot be
    formatted, is returned unchanged so validation can report it.
    """
    if isinstance(label, str):
        return label
    value = signals.get(label.source)
    if not value:
        value = label.default or SIGNAL_PLACEHOLDERS.get(label.source)
    if not value or template_problem(label.template) is not None:
        return label
    return label.render(value)


def resolve_labels(
    items: cabc.Iterable[NavItem], signals: cabc.Mapping[str, str | None]
) -> tuple[NavItem, ...]:
    """Bind computed labels without reordering items or changing their type."""
    resolved: list[NavItem] = []
    for item in items:
        match item:
            case NavDropdown(label=label, items=children):
                resolved.append(
                    dc.replace(
                        item,
                        label=resolve_label(label, signals),
                        items=tuple(
                            dc.replace(child, label=resolve_label(child.label, signals))
                            for child in children
                        ),
                    )
                )
            case NavLink(label=label):
                resolved.append(dc.replace(item, label=resolve_label(label, signals)))
            case _:
                resolved.append(item)
    return tuple(resolved)


def _build_label(
    value: object, location: str, problems: list[ConfigProblem]
) -> str | ComputedLabel | None:
    """Build a literal or computed label from its YAML form."""
    match value:
        case str() as text if text.strip():
            return text
        case {"computed": source, **rest} if _optional_str(source):
            template = str(rest.get("template", "{value}"))
            problem = template_problem(template)
            if problem is not None:
                problems.append(ConfigProblem(f"{location}.template", problem))
            return ComputedLabel(
                source=str(source).strip(),
                template=template,
                default=_optional_str(rest.get("default")),
            )
        case _:
            problems.append(
                ConfigProblem(location, "label must be text or a 'computed' mapping")
            )
            return None


def _build_nav_link(
    entry: typ.Mapping[str, object], location: str, problems: list[ConfigProblem]
) -> NavLink | None:
    label = _build_label(entry.get("label"), f"{location}.label", problems)
    target = _optional_str(entry.get("link"))
    if target is None:
        problems.append(ConfigProblem(f"{location}.link", "links require a 'link'"))
    if label is None or target is None:
        return None
    return NavLink(
        label=label,
        target=target,
        active_match=_optional_str(entry.get("active_match")),
    )


def _build_nav_items(
    entries: object, problems: list[ConfigProblem]
) -> tuple[NavItem, ...]:
    """Build the ordered top navigation from its YAML list."""
    match entries:
        case None:
            return ()
        case list() as items:
            iterable = items
        case _:
            problems.append(ConfigProblem("nav", "navigation must be a list"))
            return ()

    nav: list[NavItem] = []
    for index, entry in enumerate(iterable):
        location = f"nav[{index}]"
        match entry:
            case {"items": children, **rest}:
                dropdown = _build_dropdown(children, rest, location, problems)
                if dropdown is not None:
                    nav.append(dropdown)
            case dict() as data:
                link = _build_nav_link(data, location, problems)
                if link is not None:
                    nav.append(link)
            case _:
                problems.append(ConfigProblem(location, "nav entries must be mappings"))
    logger.debug("built %d navigation entries", len(nav))
    return tuple(nav)


def _build_dropdown(
    children: object,
    rest: typ.Mapping[str, object],
    location: str,
    problems: list[ConfigProblem],
) -> NavDropdown | None:
    label = _build_label(rest.get("label"), f"{location}.label", problems)
    if not isinstance(children, list):
        problems.append(ConfigProblem(f"{location}.items", "items must be a list"))
        return None
    links: list[NavLink] = []
    for child_index, child in enumerate(children):
        child_location = f"{location}.items[{child_index}]"
        if not isinstance(child, dict):
            problems.append(
                ConfigProblem(child_location, "dropdown entries must be mappings")
            )
            continue
        link = _build_nav_link(child, child_location, problems)
        if link is not None:
            links.append(link)
    if label is None:
        return None
    return NavDropdown(label=label, items=tuple(links))


__all__ = [
    "SIGNAL_PLACEHOLDERS",
    "_build_label",
    "_build_nav_items",
    "resolve_label",
    "resolve_labels",
    "signal_values",
    "template_problem",
]
