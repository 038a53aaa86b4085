"""Render JSON-like values as HCL expressions."""

from __future__ import annotations

from typing import Any


def _is_interpolation(text: str) -> bool:
    return text.startswith("${") and text.endswith("}")


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def marshal_indent(value: Any, prefix: str, indent: str) -> str:
    """Render value as an HCL expression, indenting nested lines."""
    if value is None:
        return "null"
    inner = prefix + indent
    if isinstance(value, dict):
        lines = []
        for key in sorted(value):
            if "/" in key or key[:1].isdigit() and key[:1] in "0123456789":
                wrapped = f'"{key}"'
            elif _is_interpolation(key):
                wrapped = f"({key[2:-1]})"
            else:
                wrapped = key
            lines.append(f"{inner}{wrapped} = {marshal_indent(value[key], inner, indent)}\n")
        return "{\n" + "".join(lines) + prefix + "}"
    if isinstance(value, list):
        lines = [f"{inner}{marshal_indent(item, inner, indent)},\n" for item in value]
        return "[\n" + "".join(lines) + prefix + "]"
    if isinstance(value, str):
        if _is_interpolation(value):
            return value[2:-1]
        return f'"{value}"'
    return _scalar(value)