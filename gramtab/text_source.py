"""
This module contains functionality for reading a grammar from its text
form: a whitespace-delimited sequence of rule blocks

    LHS -> RHS_1 | RHS_2 | ... ;

where '->', '|', and ';' are reserved and every other token is a symbol.
An alternative may be empty.
"""
from __future__ import annotations
from typing import List, Tuple

import re

from gramtab.errors import GrammarSyntaxError
from gramtab.interfaces import GrammarSource, Rule
from gramtab.symbols import Symbol


ARROW = "->"
BAR = "|"
SEMI = ";"


def tokenize(s: str) -> tuple[str, ...]:
    return tuple(filter(None, re.split(r"\s+", s)))


class TextGrammarSource(GrammarSource):
    """
    TextGrammarSource reads rule blocks out of grammar text.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._toks = tokenize(text)
        self._pos = 0
        self._cache_rules: list[Rule] | None = None

    def get_rules(self) -> list[Rule]:
        if self._cache_rules is not None:
            return self._cache_rules
        self._pos = 0
        result = []
        while self._peek() is not None:
            result.append(self._rule())
        self._cache_rules = result
        return result

    def _rule(self) -> Rule:
        lhs = self._next("a left-hand side")
        if lhs in (ARROW, BAR, SEMI):
            raise GrammarSyntaxError(
                "Expected a left-hand side, got '%s' (token %d)"
                % (lhs, self._pos)
            )
        self._expect(ARROW)
        alternatives = [self._rhs()]
        while self._peek() == BAR:
            self._expect(BAR)
            alternatives.append(self._rhs())
        self._expect(SEMI)
        return (Symbol(lhs), alternatives)

    def _rhs(self) -> Tuple[Symbol, ...]:
        out: List[Symbol] = []
        while True:
            tok = self._peek()
            if tok is None:
                raise GrammarSyntaxError(
                    "Unexpected end of grammar; '%s' or '%s' expected"
                    % (BAR, SEMI)
                )
            if tok in (BAR, SEMI):
                return tuple(out)
            if tok == ARROW:
                raise GrammarSyntaxError(
                    "Unexpected '%s' (token %d); '%s' or '%s' expected"
                    % (ARROW, self._pos + 1, BAR, SEMI)
                )
            out.append(Symbol(self._next("a symbol")))

    def _peek(self) -> str | None:
        if self._pos < len(self._toks):
            return self._toks[self._pos]
        return None

    def _next(self, what: str) -> str:
        tok = self._peek()
        if tok is None:
            raise GrammarSyntaxError(
                "Unexpected end of grammar; %s expected" % what
            )
        self._pos += 1
        return tok

    def _expect(self, expected: str) -> None:
        tok = self._next("'%s'" % expected)
        if tok != expected:
            raise GrammarSyntaxError(
                "Unexpected '%s' (token %d); '%s' expected"
                % (tok, self._pos, expected)
            )
