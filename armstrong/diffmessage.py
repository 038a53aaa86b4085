"""Human readable descriptions of a resource body diff."""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any

from armstrong.jsondiff import DiffOptions, Tag, compare, default_console_options
from armstrong.types import Change

_READABLE_OPTIONS = DiffOptions(
    added=Tag("\033[0;32m", " is not returned from response\033[0m"),
    removed=Tag("\033[0;31m", "\033[0m"),
    changed=Tag("\033[0;33m Got ", "\033[0m"),
    changed_separator=" in response, expect ",
    indent="    ",
)

_MARKDOWN_OPTIONS = DiffOptions(
    added=Tag("", " is not returned from response"),
    removed=Tag("", ""),
    changed=Tag("Got ", ""),
    changed_separator=" in response, expect ",
    indent="    ",
)


def diff_message_terraform(change: Change) -> str:
    """Render the diff the way terraform colours it."""
    return compare(change.before, change.after, default_console_options())[1]


def diff_message_readable(change: Change) -> str:
    """Render the diff with coloured explanations for a terminal."""
    return compare(change.before, change.after, _READABLE_OPTIONS)[1]


def diff_message_markdown(change: Change) -> str:
    """Render the diff with plain-text explanations."""
    return compare(change.before, change.after, _MARKDOWN_OPTIONS)[1]


def _finite(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _load(text: str) -> Any:
    """Decode text with every number as a float; None if it is not JSON."""
    try:
        return json.loads(
            text, parse_float=_finite, parse_int=_finite, parse_constant=_reject_constant
        )
    except ValueError:
        return None


def _format_float(value: float) -> str:
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple))
    point = len(digits) + exponent
    digits = digits.rstrip("0") or "0"
    power = point - 1
    if power < -4 or power >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'+' if power >= 0 else '-'}{abs(power):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _show(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_float(float(value))
    if isinstance(value, list):
        return "[" + " ".join(_show(item) for item in value) + "]"
    if isinstance(value, dict):
        return "map[" + " ".join(f"{k}:{_show(value[k])}" for k in sorted(value)) + "]"
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare(got: Any, expect: Any, path: str) -> list[str]:
    if expect is None and got is None:
        return []
    if expect is None:
        return [f"{path}: expect null, but got {_show(got)}"]
    if got is None:
        return [f"{path} = {_show(expect)}: not returned from response"]
    mismatch = [f"{path}: expect {_show(expect)}, but got {_show(got)}"]
    if isinstance(expect, dict):
        if not isinstance(got, dict):
            return [f"{path}: expect {_show(expect)} which is a map, but got {_show(got)}"]
        return [
            line
            for key, value in expect.items()
            for line in _compare(got.get(key), value, f"{path}.{key}")
        ]
    if isinstance(expect, list):
        if not isinstance(got, list):
            return [f"{path}: expect {_show(expect)} which is an array, but got {_show(got)}"]
        if len(got) != len(expect):
            return [f"{path}: expect {len(expect)} in length, but got {len(got)}"]
        return [
            line
            for index, (got_item, expect_item) in enumerate(zip(got, expect))
            for line in _compare(got_item, expect_item, f"{path}.{index}")
        ]
    if isinstance(expect, bool):
        if not isinstance(got, bool):
            return [f"{path}: expect {_show(expect)} which is a bool, but got {_show(got)}"]
        return mismatch if got != expect else []
    if isinstance(expect, str):
        if not isinstance(got, str):
            return [f"{path}: expect {expect} which is a string, but got {_show(got)}"]
        if got == expect:
            return []
        if got.casefold() == expect.casefold():
            return [
                f"{path}: the values are not equal case-sensitively, "
                f"expect {expect}, but got {got}"
            ]
        return mismatch
    if _is_number(expect):
        if not _is_number(got):
            return [f"{path}: expect {_show(expect)} which is a number, but got {_show(got)}"]
        return mismatch if float(got) != float(expect) else []
    return []


def diff_message_description(change: Change) -> str:
    """List, one per line, how the response differs from the configuration."""
    got = _load(change.before)
    expect = _load(change.after)
    return "\n".join(_compare(got, expect, "- "))