"""Placeholder substitution and pluralization for outgoing replies."""

from __future__ import annotations

import math
import random
import re
from collections.abc import Mapping, Sequence
from typing import Any

_PLACEHOLDER_PATTERN = re.compile(r"\$\((\w+)\)")
_RANDOM_PATTERN = re.compile(r"\$\(random\s+(-?\d+)\s*,\s*(-?\d+)\)")
_PICK_PATTERN = re.compile(r"\$\(pick\s+(.+?)\)")


def format_placeholders(
    text: str,
    placeholders: Mapping[str, Any] | None = None,
    *,
    chat: Any = None,
) -> str:
    """Replace ``$(...)`` variables in a reply template.

    Supported variables:
        $(prefix)           Command prefix of *chat*
        $(language)         Language code of *chat*
        $(<name>)           Any key of *placeholders*
        $(random min,max)   Random integer in range [min, max]
        $(pick a,b,c)       Random pick from comma-separated items

    Unknown names are left untouched.
    """
    values: dict[str, str] = {}
    if chat is not None:
        values["prefix"] = chat.command_prefix
        values["language"] = chat.language
    for key, value in (placeholders or {}).items():
        values[key] = str(value)

    def _random_replace(m: re.Match) -> str:
        lo, hi = int(m.group(1)), int(m.group(2))
        if lo > hi:
            lo, hi = hi, lo
        return str(random.randint(lo, hi))

    def _pick_replace(m: re.Match) -> str:
        items = [i.strip() for i in m.group(1).split(",") if i.strip()]
        return random.choice(items) if items else ""

    text = _RANDOM_PATTERN.sub(_random_replace, text)
    text = _PICK_PATTERN.sub(_pick_replace, text)
    return _PLACEHOLDER_PATTERN.sub(lambda m: values.get(m.group(1), m.group(0)), text)


def plural_form(value: float, forms: Sequence[str]) -> str:
    """Pick the singular form for exactly one, the plural form otherwise."""
    return forms[0] if value == 1 else forms[-1]


def format_seconds(milliseconds: int) -> tuple[str, float]:
    """Render a wait time as seconds rounded up to one decimal.

    Returns the display string and the rounded value used for plurals.
    """
    seconds = math.ceil(milliseconds / 100) / 10
    return f"{seconds:g}", seconds
