from __future__ import annotations

from gramtab.automaton import LrTable
from gramtab.errors import (
    ConsistencyFault,
    NoTableEntry,
    UnexpectedToken,
)
from gramtab.grammar import (
    Production,
    ShiftAction,
    ReduceAction,
    AcceptAction,
)
from gramtab.interfaces import Parser, is_eoi
from gramtab.symbols import Symbol, as_symbol, eoi


class Lr(Parser):
    """
    LR parser.  The Lr class uses an LrTable instance in order to parse
    input that is fed to it via the token() method, and terminated via the
    eoi() method, or all at once via parse().
    """

    _table: LrTable
    _stack: list[tuple[Symbol, int]]

    def __init__(self, table: LrTable, verbose: bool = False) -> None:
        self._table = table
        self.verbose = verbose
        self.reset()

    @property
    def table(self) -> LrTable:
        return self._table

    @property
    def accepted(self) -> bool:
        return self._accepted

    def reset(self) -> None:
        self._stack = []
        self._accepted = False

    def token(self, token: Symbol | str) -> None:
        """Feed a token to the parser.  '$' signals end-of-input."""
        if is_eoi(token):
            self.eoi()
            return
        sym = as_symbol(token)
        if self._accepted:
            raise UnexpectedToken(sym)
        self._act(sym)

    def eoi(self) -> None:
        """Signal end-of-input to the parser."""
        if self._accepted:
            raise UnexpectedToken(eoi)
        self._act(eoi)
        assert self._accepted
        if self.verbose:
            print("   --> accept")

    def _state(self) -> int:
        if self._stack:
            return self._stack[-1][1]
        return self._table.startState

    def _act(self, sym: Symbol) -> None:
        if self.verbose:
            self._printStack()
            print("INPUT: %r" % sym)

        # Symbols still to be looked up; a reduction pushes its left-hand
        # side here, on top of the lookahead it did not consume.
        pending = [sym]
        while pending:
            look = pending[-1]
            state = self._state()
            action = self._table.action(state, look)
            if action is None:
                raise NoTableEntry(state, look)

            if self.verbose:
                print("   --> %r" % action)
            if type(action) is ShiftAction:
                self._stack.append((look, action.nextState))
                pending.pop()
            elif type(action) is ReduceAction:
                self._reduce(action.production)
                pending.append(action.lhs)
            else:
                assert type(action) is AcceptAction
                assert look == eoi
                pending.pop()
                self._accepted = True

            if self.verbose:
                self._printStack()

    def _printStack(self) -> None:
        print("STACK:", end=" ")
        for node in self._stack:
            print("%r" % node[0], end=" ")
        print()
        print("      ", end=" ")
        for node in self._stack:
            print(
                "%r%s"
                % (
                    node[1],
                    (" " * (len("%r" % node[0]) - len("%r" % node[1]))),
                ),
                end=" ",
            )
        print()

    def _reduce(self, production: Production) -> None:
        for expected in reversed(production.rhs):
            if not self._stack:
                raise ConsistencyFault(
                    "Parse stack underflow reducing %r" % production
                )
            sym, _ = self._stack.pop()
            if sym != expected:
                raise ConsistencyFault(
                    "Reducing %r, but found %r on the stack where %r was "
                    "expected" % (production, sym, expected)
                )
