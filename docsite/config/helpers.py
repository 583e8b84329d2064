"""Utility helpers shared by the docsite configuration loader."""

from __future__ import annotations

import types
import typing as typ

from .models import ConfigProblem


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_bool(
    value: object | None, location: str, problems: list[ConfigProblem]
) -> bool | None:
    """Return ``value`` when it is a boolean, recording a problem otherwise."""
    match value:
        case None:
            return None
        case bool():
            return value
        case _:
            problems.append(ConfigProblem(location, "expected true or false"))
            return None


def _string_mapping(
    value: object | None, location: str, problems: list[ConfigProblem]
) -> types.MappingProxyType[str, str]:
    """Return a read-only ``str -> str`` mapping built from a YAML mapping."""
    match value:
        case None:
            return types.MappingProxyType({})
        case dict() as data:
            return types.MappingProxyType(
                {str(key): "" if item is None else str(item) for key, item in data.items()}
            )
        case _:
            problems.append(ConfigProblem(location, "expected a mapping"))
            return types.MappingProxyType({})


def _flatten_translations(
    value: typ.Mapping[str, object], prefix: str = ""
) -> dict[str, str]:
    """Flatten nested translation tables into dotted keys.

    Examples
    --------
    >>> _flatten_translations({"button": {"buttonText": "Find"}})
    {'button.buttonText': 'Find'}
    """
    flattened: dict[str, str] = {}
    for key, item in value.items():
        dotted = f"{prefix}{key}"
        if isinstance(item, dict):
            flattened.update(_flatten_translations(item, prefix=f"{dotted}."))
        elif item is not None:
            flattened[dotted] = str(item)
    return flattened


__all__ = [
    "_flatten_translations",
    "_optional_bool",
    "_optional_str",
    "_string_mapping",
]
