"""Alias discovery in public routine sources.

This is a lexical scan for two surface forms, not a parse:

- call-style registration: ``New-Alias -Name gh -Value Get-Hello`` or
  ``Set-Alias gh Get-Hello``
- attribute-style declaration: ``[Alias('gh', 'hello')]`` among the routine's
  own attributes, ahead of its ``param(...)`` block

``[Alias(...)]`` attributes inside a ``param(...)`` block name parameter
aliases and are ignored. Aliases declared any other way (splatted
parameters, ``-Value`` before ``-Name``, computed names) are not discovered.
"""

from __future__ import annotations

import re
from collections.abc import Iterable  # noqa: TC003
from dataclasses import dataclass

_NAME = r"[\w][\w.-]*"

_CALL_STYLE = re.compile(
    rf"""\b(?:New|Set)-Alias\s+
        (?:-Name\s+)?['"]?(?P<alias>{_NAME})['"]?\s+
        (?:-Value\s+)?['"]?(?P<target>{_NAME})['"]?""",
    re.IGNORECASE | re.VERBOSE,
)
_ATTRIBUTE_STYLE = re.compile(r"\[Alias\(\s*(?P<args>[^)]*)\)\]", re.IGNORECASE)
_QUOTED = re.compile(r"""['"]([^'"]+)['"]""")
_PARAM_BLOCK = re.compile(r"\bparam\s*\(", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Alias:
    """An alternate name bound to an exported routine."""

    name: str
    target: str


def _closing_paren(text: str, start: int) -> int:
    """Index just past the parenthesis closing the group opened before `start`.

    Parentheses inside quoted strings and ``#`` comments do not count. An
    unbalanced group runs to the end of the text.
    """
    depth = 1
    quote = ""
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "#":
            newline = text.find("\n", i)
            if newline == -1:
                break
            i = newline
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(text)


def _param_block_spans(text: str) -> list[tuple[int, int]]:
    """(start, end) offsets of every ``param(...)`` block."""
    spans: list[tuple[int, int]] = []
    pos = 0
    while True:
        match = _PARAM_BLOCK.search(text, pos)
        if match is None:
            return spans
        end = _closing_paren(text, match.end())
        spans.append((match.start(), end))
        pos = end


def extract_aliases(text: str, routine_name: str) -> list[Alias]:
    """Find alias declarations in a routine's source text.

    Args:
        text: Source text of one public routine file.
        routine_name: The routine's logical name, bound by attribute-style aliases.

    Returns:
        Aliases in source order (duplicates kept).
    """
    found: list[tuple[int, Alias]] = []

    for match in _CALL_STYLE.finditer(text):
        found.append((match.start(), Alias(name=match["alias"], target=match["target"])))

    param_blocks = _param_block_spans(text)
    for match in _ATTRIBUTE_STYLE.finditer(text):
        if any(start <= match.start() < end for start, end in param_blocks):
            continue
        for name_match in _QUOTED.finditer(match["args"]):
            name = name_match.group(1).strip()
            if name:
                found.append((match.start() + name_match.start(), Alias(name=name, target=routine_name)))

    found.sort(key=lambda item: item[0])
    return [alias for _, alias in found]


def dedupe_aliases(names: Iterable[str]) -> tuple[str, ...]:
    """Collapse names case-insensitively and sort them.

    The first spelling seen wins. Applying this to its own output returns
    the same tuple.
    """
    unique: dict[str, str] = {}
    for name in names:
        unique.setdefault(name.casefold(), name)
    return tuple(sorted(unique.values(), key=lambda n: (n.casefold(), n)))
