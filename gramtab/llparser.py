from __future__ import annotations

from gramtab.errors import UnexpectedEndOfInput, UnexpectedToken
from gramtab.interfaces import Parser, is_eoi
from gramtab.lltable import LlTable
from gramtab.symbols import Symbol, as_symbol, eoi, start


class Ll(Parser):
    """
    LL(1) predictive parser.  The Ll class keeps a stack of the symbols it
    expects to see next, starting with [Start].  Terminals on top of the
    stack must match the input exactly; non-terminals are replaced by the
    alternative that the LlTable predicts for the current lookahead.
    Input is fed via the token() method and terminated via the eoi()
    method, or given all at once to parse().
    """

    _table: LlTable
    _stack: list[Symbol]

    def __init__(self, table: LlTable, verbose: bool = False) -> None:
        self._table = table
        self.verbose = verbose
        self.reset()

    @property
    def table(self) -> LlTable:
        return self._table

    @property
    def accepted(self) -> bool:
        return self._accepted

    def reset(self) -> None:
        self._stack = [start]
        self._accepted = False

    def token(self, token: Symbol | str) -> None:
        """Feed a token to the parser.  '$' signals end-of-input."""
        if is_eoi(token):
            self._end(explicit=True)
            return
        sym = as_symbol(token)
        if self.verbose:
            self._printStack(sym)

        while True:
            if not self._stack:
                # The start symbol has already been matched in full.
                raise UnexpectedToken(sym)
            expected = self._stack.pop()
            if expected.terminal:
                if expected != sym:
                    raise UnexpectedToken(sym, expected)
                break
            self._predict(expected, sym)

    def eoi(self) -> None:
        """Signal end-of-input to the parser."""
        self._end(explicit=False)

    # explicit is true when '$' arrived as an input token.  It is then a
    # lookahead like any other, and a mismatch is an UnexpectedToken;
    # otherwise the input simply ran out.
    def _end(self, explicit: bool) -> None:
        if self._accepted:
            raise UnexpectedToken(eoi)
        if self.verbose:
            self._printStack(eoi)

        while self._stack:
            expected = self._stack.pop()
            rhs_id: int | None = None
            if not expected.terminal:
                rhs_id = self._table.predict(expected, eoi)
            if rhs_id is None:
                if explicit:
                    raise UnexpectedToken(eoi, expected)
                raise UnexpectedEndOfInput(expected)
            self._push(expected, rhs_id)

        self._accepted = True
        if self.verbose:
            print("   --> accept")

    def _predict(self, expected: Symbol, lookahead: Symbol) -> None:
        rhs_id = self._table.predict(expected, lookahead)
        if rhs_id is None:
            raise UnexpectedToken(lookahead, expected)
        self._push(expected, rhs_id)

    def _push(self, lhs: Symbol, rhs_id: int) -> None:
        production = self._table.grammar.production(lhs, rhs_id)
        if self.verbose:
            print("   --> %r" % production)
        # Leftmost symbol ends up on top.
        for sym in reversed(production.rhs):
            self._stack.append(sym)

    def _printStack(self, lookahead: Symbol) -> None:
        print("STACK:", end=" ")
        for sym in self._stack:
            print("%r" % sym, end=" ")
        print()
        print("INPUT: %r" % lookahead)
