"""
This module declares several structural ("duck typing") interfaces
that objects or classes can implement to be used in the library
"""

from __future__ import annotations
from typing import Iterable, List, Tuple

import abc

from gramtab.errors import ParsingError
from gramtab.symbols import Symbol, eoi


Rule = Tuple[Symbol, List[Tuple[Symbol, ...]]]


class GrammarSource(abc.ABC):
    @abc.abstractmethod
    def get_rules(self) -> list[Rule]:
        """
        Return the rule blocks in source order.  Each block is a left-hand
        side and its list of alternatives; the same left-hand side may
        occur in several blocks."""
        raise NotImplementedError


class ParseResult:
    """
    Outcome of Parser.parse(): either accepted, or the ParsingError that
    stopped the parse."""

    def __init__(self, accepted: bool, error: ParsingError | None) -> None:
        self.accepted = accepted
        self.error = error

    def __bool__(self) -> bool:
        return self.accepted

    def __repr__(self) -> str:
        if self.accepted:
            return "ParseResult(accepted)"
        return "ParseResult(rejected: %s)" % (self.error,)


class Parser(abc.ABC):
    @abc.abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def token(self, token: Symbol | str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def eoi(self) -> None:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def accepted(self) -> bool:
        raise NotImplementedError

    def parse(self, tokens: str | Iterable[Symbol | str]) -> ParseResult:
        """
        Parse a complete input, given either as whitespace-delimited token
        text or as a sequence of tokens.  A '$' token ends the input; if
        there is none, end-of-input is signalled after the last token.
        Parse errors are reported via the result rather than raised."""
        if isinstance(tokens, str):
            tokens = tokens.split()
        self.reset()
        try:
            for token in tokens:
                self.token(token)
            if not self.accepted:
                self.eoi()
        except ParsingError as e:
            return ParseResult(False, e)
        return ParseResult(True, None)


def is_eoi(token: Symbol | str) -> bool:
    if isinstance(token, Symbol):
        return token == eoi
    return token == eoi.label
