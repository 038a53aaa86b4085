"""Light-weight editing of terraform configuration blocks."""

from __future__ import annotations

import logging
import os
import random
import re
from dataclasses import dataclass, field

from armstrong.types import Dependency

logger = logging.getLogger(__name__)

_rng = random.Random()
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")
_HEREDOC = re.compile(r"<<-?([A-Za-z_][A-Za-z0-9_]*)[ \t]*\r?\n")

PROVIDER_HCL = """
terraform {
  required_providers {
    azapi = {
      source  = "Azure/azapi"
    }
  }
}

provider "azurerm" {
  features {}
  skip_provider_registration = false
}

provider "azapi" {
  skip_provider_registration = false
}
"""


def _skip_ws(text: str, i: int, newlines: bool = True) -> int:
    n = len(text)
    while i < n:
        c = text[i]
        if c in " \t\r" or (newlines and c == "\n"):
            i += 1
        elif c == "#" or text.startswith("//", i):
            j = text.find("\n", i)
            if j < 0 or not newlines:
                return n if j < 0 else j
            i = j
        elif text.startswith("/*", i):
            j = text.find("*/", i + 2)
            if j < 0:
                raise ValueError("unterminated comment")
            i = j + 2
        else:
            break
    return i


def _skip_template(text: str, i: int) -> int:
    depth = 1
    while i < len(text):
        c = text[i]
        if c == '"':
            i = _skip_string(text, i)
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    raise ValueError("unterminated template interpolation")


def _skip_string(text: str, i: int) -> int:
    i += 1
    while i < len(text):
        c = text[i]
        if c == "\\":
            i += 2
        elif c == '"':
            return i + 1
        elif text.startswith("${", i) or text.startswith("%{", i):
            i = _skip_template(text, i + 2)
        elif c == "\n":
            break
        else:
            i += 1
    raise ValueError("unterminated string")


def _skip_heredoc(text: str, i: int) -> int | None:
    m = _HEREDOC.match(text, i)
    if not m:
        return None
    marker = m.group(1)
    pos = m.end()
    while True:
        j = text.find("\n", pos)
        line_end = len(text) if j < 0 else j
        if text[pos:line_end].strip() == marker:
            return line_end
        if j < 0:
            raise ValueError(f"unterminated heredoc {marker}")
        pos = j + 1


def _expr_end(text: str, i: int) -> tuple[int, int]:
    """Return where an expression stops and the end of its last token."""
    depth = 0
    last = i
    n = len(text)
    while i < n:
        c = text[i]
        if c == '"':
            i = last = _skip_string(text, i)
            continue
        if text.startswith("<<", i):
            end = _skip_heredoc(text, i)
            if end is not None:
                i = last = end
                continue
        if c == "#" or text.startswith("//", i) or text.startswith("/*", i):
            i = _skip_ws(text, i, newlines=False)
            continue
        if c in "([{":
            depth += 1
        elif c in ")]}":
            if depth == 0:
                return i, last
            depth -= 1
        elif c == "\n" and depth == 0:
            return i, last
        if c not in " \t\r\n":
            last = i + 1
        i += 1
    return n, last


def _match_brace(text: str, i: int) -> int:
    depth = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == '"':
            i = _skip_string(text, i)
            continue
        if text.startswith("<<", i):
            end = _skip_heredoc(text, i)
            if end is not None:
                i = end
                continue
        if c == "#" or text.startswith("//", i) or text.startswith("/*", i):
            i = _skip_ws(text, i, newlines=False)
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise ValueError("unbalanced braces")


def _read_labels(text: str, i: int) -> tuple[list[str], int]:
    labels = []
    while True:
        i = _skip_ws(text, i, newlines=False)
        if i >= len(text):
            raise ValueError("unexpected end of input in block header")
        if text[i] == "{":
            return labels, i
        if text[i] == '"':
            end = _skip_string(text, i)
            labels.append(text[i + 1:end - 1])
            i = end
            continue
        m = _IDENT.match(text, i)
        if not m:
            raise ValueError(f"unexpected character {text[i]!r} in block header")
        labels.append(m.group())
        i = m.end()


@dataclass
class HclBlock:
    """A top-level block: its type, labels and raw body text."""

    type: str
    labels: list[str] = field(default_factory=list)
    body: str = ""

    def _attribute_spans(self) -> dict[str, tuple[int, int]]:
        spans: dict[str, tuple[int, int]] = {}
        text = self.body
        i = 0
        while True:
            i = _skip_ws(text, i)
            if i >= len(text):
                return spans
            m = _IDENT.match(text, i)
            if not m:
                raise ValueError(f"unexpected character {text[i]!r} in block body")
            j = _skip_ws(text, m.end(), newlines=False)
            if text.startswith("=", j) and not text.startswith("==", j):
                start = _skip_ws(text, j + 1, newlines=False)
                stop, last = _expr_end(text, start)
                spans.setdefault(m.group(), (start, last))
                i = stop
            else:
                _, brace = _read_labels(text, m.end())
                i = _match_brace(text, brace) + 1

    def attribute(self, name: str) -> str | None:
        """Return the expression text of an attribute, or None."""
        span = self._attribute_spans().get(name)
        return None if span is None else self.body[span[0]:span[1]]

    def set_attribute(self, name: str, expression: str) -> None:
        """Set an attribute to the given expression text."""
        span = self._attribute_spans().get(name)
        if span is not None:
            self.body = self.body[:span[0]] + expression + self.body[span[1]:]
            return
        body = self.body.rstrip(" \t")
        if not body.endswith("\n"):
            body += "\n"
        self.body = body + f"  {name} = {expression}\n"

    def render(self) -> str:
        """Return the block as configuration text."""
        header = " ".join([self.type, *(f'"{label}"' for label in self.labels)])
        return f"{header} {{{self.body}}}\n"


def parse_blocks(text: str) -> list[HclBlock]:
    """Parse the top-level blocks of a configuration; raises ValueError."""
    blocks = []
    i = 0
    while True:
        i = _skip_ws(text, i)
        if i >= len(text):
            return blocks
        m = _IDENT.match(text, i)
        if not m:
            raise ValueError(f"unexpected character {text[i]!r} at offset {i}")
        j = _skip_ws(text, m.end(), newlines=False)
        if text.startswith("=", j):
            i, _ = _expr_end(text, _skip_ws(text, j + 1, newlines=False))
            continue
        labels, brace = _read_labels(text, m.end())
        end = _match_brace(text, brace)
        blocks.append(HclBlock(m.group(), labels, text[brace + 1:end]))
        i = end + 1


def _two_labels(block: HclBlock) -> list[str]:
    if len(block.labels) < 2:
        raise ValueError(f"block {block.type!r} needs two labels")
    return block.labels


def random_name() -> str:
    """Return a random resource name such as ``acctest1234``."""
    return f"acctest{_rng.randrange(10000)}"


def rename_label(text: str) -> str:
    """Rename every resource label to ``test``, ``test2``... and randomise names.

    terraform, provider and output blocks are dropped.
    """
    counts: dict[str, int] = {}
    renames: dict[str, str] = {}
    rendered = []
    for block in parse_blocks(text):
        if block.type in ("terraform", "provider", "output"):
            continue
        if block.type == "variable":
            rendered.append(block.render())
            continue
        labels = list(_two_labels(block))
        count = counts.get(labels[0], 0)
        new = "test" if count == 0 else f"test{count + 1}"
        renames[f"{labels[0]}.{labels[1]}"] = f"{labels[0]}.{new}"
        labels[1] = new
        counts[labels[0]] = count + 1
        block.labels = labels
        if block.attribute("name") is not None:
            block.set_attribute("name", f'"{random_name()}"')
        rendered.append(block.render())
    result = "\n".join(rendered)
    for old, new in renames.items():
        result = result.replace(old, new)
    return result


def combine(old: str, new: str) -> str:
    """Merge two configurations, skipping blocks of new already in old."""
    parts = []
    seen = set()
    for block in parse_blocks(old):
        seen.add(".".join(block.labels))
        parts.append(block.render() + "\n")
    for block in parse_blocks(new):
        labels = _two_labels(block)
        if f"{labels[0]}.{labels[1]}" not in seen:
            parts.append(block.render() + "\n")
    return "".join(parts)


def find_resource_address(config: str, resource_type: str) -> str:
    """Return the address of the first block of resource_type, or ''."""
    for block in parse_blocks(config):
        if len(block.labels) >= 2 and block.labels[0] == resource_type:
            return f"{block.labels[0]}.{block.labels[1]}"
    return ""


def load_existing_dependencies(working_dir: str | os.PathLike) -> list[Dependency]:
    """Collect the labelled blocks of every .tf file in working_dir."""
    try:
        names = sorted(os.listdir(working_dir))
    except OSError as exc:
        logger.warning("reading dir %s: %s", working_dir, exc)
        return []
    deps = []
    for name in names:
        if not name.endswith(".tf"):
            continue
        try:
            with open(os.path.join(working_dir, name), encoding="utf-8") as fh:
                blocks = parse_blocks(fh.read())
        except OSError as exc:
            logger.warning("reading file %s: %s", name, exc)
            continue
        except ValueError as exc:
            logger.warning("parsing file %s: %s", name, exc)
            continue
        for block in blocks:
            if len(block.labels) < 2:
                continue
            pattern = ""
            if block.labels[0] == "azapi_resource":
                pattern = get_azapi_resource_id_pattern(block)
            address = ".".join(block.labels)
            if block.type == "data":
                address = "data." + address
            deps.append(
                Dependency(
                    pattern=pattern,
                    resource_type=block.labels[0],
                    referred_property="id",
                    address=address,
                )
            )
    return deps


def get_azapi_resource_id_pattern(block: HclBlock | None) -> str:
    """Return the id pattern implied by an azapi block's ``type`` attribute."""
    if block is None:
        return ""
    expression = block.attribute("type")
    if expression is None:
        return ""
    value = expression.strip(' "')
    at = value.find("@")
    if at < 0:
        raise ValueError(f"type has no api version: {value!r}")
    return f"/subscriptions/resourceGroups/providers/{value[:at]}"