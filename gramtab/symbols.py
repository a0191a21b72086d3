"""
Grammar vocabulary.  A Symbol is either a terminal (token) or a
non-terminal, and by default the classification follows the naming
convention used in grammar source text: a label that begins with an
uppercase letter names a non-terminal, anything else names a terminal.

Two symbols are reserved:

  start : The augmented start non-terminal, "Start".

  eoi : The end-of-input marker, "$".
"""

from __future__ import annotations
from typing import Any

from mypy_extensions import mypyc_attr


@mypyc_attr(serializable=True, allow_interpreted_subclasses=True)
class Symbol:
    """
    Immutable grammar symbol, compared and hashed by (label, terminal)."""

    def __init__(self, label: str, terminal: bool | None = None) -> None:
        if not label:
            raise ValueError("Symbol label must be non-empty")
        if terminal is None:
            terminal = not label[0].isupper()
        self._label = label
        self._terminal = terminal

    @property
    def label(self) -> str:
        return self._label

    @property
    def terminal(self) -> bool:
        return self._terminal

    def __hash__(self) -> int:
        return hash((self._label, self._terminal))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Symbol):
            return (
                self._label == other._label
                and self._terminal == other._terminal
            )
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Symbol):
            return (self._label, self._terminal) < (
                other._label,
                other._terminal,
            )
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return self._label

    __str__ = __repr__


# Start.
start = Symbol("Start", False)

# $.
eoi = Symbol("$", True)


def as_symbol(tok: Symbol | str) -> Symbol:
    """Convert token text to a Symbol; Symbols pass through untouched."""
    if isinstance(tok, Symbol):
        return tok
    return Symbol(tok)
