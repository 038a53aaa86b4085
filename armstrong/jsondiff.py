"""Structural comparison of two JSON documents with a marked-up rendering."""

from __future__ import annotations

import itertools
import json
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any, Callable, Iterable


class Difference(Enum):
    FULL_MATCH = 0
    SUPERSET_MATCH = 1
    NO_MATCH = 2
    FIRST_ARG_IS_INVALID_JSON = 3
    SECOND_ARG_IS_INVALID_JSON = 4
    BOTH_ARGS_ARE_INVALID_JSON = 5


@dataclass(frozen=True)
class Tag:
    """Text written before and after a marked span."""

    begin: str = ""
    end: str = ""


@dataclass(frozen=True)
class DiffOptions:
    normal: Tag = field(default_factory=Tag)
    added: Tag = field(default_factory=Tag)
    removed: Tag = field(default_factory=Tag)
    changed: Tag = field(default_factory=Tag)
    prefix: str = ""
    indent: str = ""
    changed_separator: str = ""


def default_console_options() -> DiffOptions:
    """Options that colour the output for a terminal."""
    return DiffOptions(
        added=Tag("\033[0;32m", "\033[0m"),
        removed=Tag("\033[0;31m", "\033[0m"),
        changed=Tag("\033[0;33m", "\033[0m"),
        changed_separator=" => ",
        indent="    ",
    )


class _Number(str):
    """A JSON number kept as its literal text."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


_DECODER = json.JSONDecoder(
    parse_float=_Number, parse_int=_Number, parse_constant=_reject_constant
)
_MISSING = object()
_ESCAPES = {
    '"': '\\"', "\\": "\\\\", "\a": "\\a", "\b": "\\b",
    "\f": "\\f", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\v": "\\v",
}


def _decode(data: str | bytes) -> Any:
    """Decode the first JSON value of data; trailing text is ignored."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    value, _ = _DECODER.raw_decode(data.lstrip(" \t\n\r"))
    return value


def _quote_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char.isprintable():
        return char
    code = ord(char)
    if code < 0x80:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _quote(text: str) -> str:
    return '"' + "".join(_quote_char(c) for c in text) + '"'


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, _Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


class _Printer:
    def __init__(self, options: DiffOptions) -> None:
        self._opts = options
        self._tags = {
            "normal": options.normal,
            "added": options.added,
            "removed": options.removed,
            "changed": options.changed,
        }
        self._out: list[str] = []
        self._level = 0
        self._last: str | None = None
        self.diff = Difference.FULL_MATCH

    def text(self) -> str:
        if self._last is not None:
            self._out.append(self._tags[self._last].end)
        return "".join(self._out)

    def _tag(self, name: str) -> None:
        if self._last == name:
            return
        if self._last is not None:
            self._out.append(self._tags[self._last].end)
        self._out.append(self._tags[name].begin)
        self._last = name

    def _newline(self, text: str) -> None:
        last = self._tags[self._last] if self._last is not None else None
        self._out.append(text)
        if last:
            self._out.append(last.end)
        self._out.append("\n" + self._opts.prefix + self._opts.indent * self._level)
        if last:
            self._out.append(last.begin)

    def _result(self, outcome: Difference) -> None:
        if outcome is Difference.NO_MATCH:
            self.diff = Difference.NO_MATCH
        elif outcome is Difference.SUPERSET_MATCH and self.diff is not Difference.NO_MATCH:
            self.diff = Difference.SUPERSET_MATCH

    def _key(self, key: str) -> None:
        self._out.append(_quote(key) + ": ")

    def _container(
        self,
        opening: str,
        closing: str,
        entries: Iterable[Callable[[], None]],
        after_each: Callable[[], None] | None = None,
    ) -> None:
        entries = list(entries)
        if entries:
            self._level += 1
            self._newline(opening)
        else:
            self._out.append(opening)
        for position, entry in enumerate(entries, 1):
            entry()
            if after_each is not None:
                after_each()
            if position < len(entries):
                self._newline(",")
            else:
                self._level -= 1
                self._newline("")
        self._out.append(closing)

    def _write_pair(self, key: str, value: Any) -> None:
        self._key(key)
        self.write_value(value, True)

    def write_value(self, value: Any, full: bool) -> None:
        if value is None:
            self._out.append("null")
        elif isinstance(value, bool):
            self._out.append("true" if value else "false")
        elif isinstance(value, _Number):
            self._out.append(str(value))
        elif isinstance(value, str):
            self._out.append(_quote(value))
        elif isinstance(value, list):
            if not full:
                self._out.append("[]")
                return
            self._container("[", "]", (partial(self.write_value, v, True) for v in value))
        else:
            if not full:
                self._out.append("{}")
                return
            self._container(
                "{", "}", (partial(self._write_pair, k, value[k]) for k in sorted(value))
            )

    def _mismatch(self, a: Any, b: Any) -> None:
        self._tag("changed")
        self.write_value(a, False)
        self._out.append(self._opts.changed_separator)
        self.write_value(b, False)
        self._result(Difference.NO_MATCH)

    def _only_in(self, name: str, outcome: Difference, key: str | None, value: Any) -> None:
        self._tag(name)
        if key is not None:
            self._key(key)
        self.write_value(value, True)
        self._result(outcome)

    def _array_entry(self, a: Any, b: Any) -> None:
        if b is _MISSING:
            self._only_in("removed", Difference.SUPERSET_MATCH, None, a)
        elif a is _MISSING:
            self._only_in("added", Difference.NO_MATCH, None, b)
        else:
            self.print_diff(a, b)

    def _object_entry(self, a: dict, b: dict, key: str) -> None:
        if key in a and key in b:
            self._key(key)
            self.print_diff(a[key], b[key])
        elif key in a:
            self._only_in("removed", Difference.SUPERSET_MATCH, key, a[key])
        else:
            self._only_in("added", Difference.NO_MATCH, key, b[key])

    def print_diff(self, a: Any, b: Any) -> None:
        if a is None or b is None:
            if a is None and b is None:
                self._tag("normal")
                self.write_value(None, False)
                self._result(Difference.FULL_MATCH)
            else:
                self._mismatch(a, b)
            return
        kind = _kind(a)
        if kind != _kind(b):
            self._mismatch(a, b)
            return
        back_to_normal = partial(self._tag, "normal")
        if kind == "array":
            self._tag("normal")
            pairs = itertools.zip_longest(a, b, fillvalue=_MISSING)
            self._container(
                "[", "]", (partial(self._array_entry, x, y) for x, y in pairs), back_to_normal
            )
            return
        if kind == "object":
            self._tag("normal")
            keys = sorted(a.keys() | b.keys())
            self._container(
                "{", "}", (partial(self._object_entry, a, b, k) for k in keys), back_to_normal
            )
            return
        if a != b:
            self._mismatch(a, b)
            return
        self._tag("normal")
        self.write_value(a, True)
        self._result(Difference.FULL_MATCH)


def compare(a: str | bytes, b: str | bytes, options: DiffOptions) -> tuple[Difference, str]:
    """Compare two JSON documents; return how they relate and a marked-up rendering.

    Numbers are compared by their literal text.
    """
    try:
        first = _decode(a)
        first_ok = True
    except ValueError:
        first_ok = False
    try:
        second = _decode(b)
        second_ok = True
    except ValueError:
        second_ok = False
    if not first_ok and not second_ok:
        return Difference.BOTH_ARGS_ARE_INVALID_JSON, "both arguments are invalid json"
    if not first_ok:
        return Difference.FIRST_ARG_IS_INVALID_JSON, "first argument is invalid json"
    if not second_ok:
        return Difference.SECOND_ARG_IS_INVALID_JSON, "second argument is invalid json"
    printer = _Printer(options)
    printer.print_diff(first, second)
    return printer.diff, printer.text()