"""
FIRST and FOLLOW sets.  Both are computed once for the whole grammar by
iterating to a fixpoint, so recursive and mutually recursive definitions
need no special treatment.  Nullability comes from the grammar itself.
"""
from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    AbstractSet,
    Dict,
    Iterable,
    Sequence,
    Tuple,
)

from gramtab.symbols import Symbol, start, eoi

if TYPE_CHECKING:
    from gramtab.grammar import Grammar


class SetAnalysis:
    def __init__(self, grammar: Grammar) -> None:
        self._grammar = grammar
        self._nullable = grammar.nullable
        self._firstSet: Dict[Symbol, set[Symbol]] = {}
        self._followSet: Dict[Symbol, set[Symbol]] = {}
        self._firstSetCache: Dict[Tuple[Symbol, ...], frozenset[Symbol]] = {}

        syms = set(grammar.terminals) | set(grammar.nonterminals)
        for sym in syms:
            self._firstSet[sym] = set()
            self._followSet[sym] = set()

        self._firstSets()
        self._followSets()

    def first(self, sym: Symbol) -> frozenset[Symbol]:
        if sym.terminal:
            return frozenset((sym,))
        return frozenset(self._firstSet[sym])

    def first_of(self, s: Sequence[Symbol]) -> frozenset[Symbol]:
        """
        FIRST of a symbol string.  Scanning stops at the first symbol that
        is not nullable; an empty string contributes nothing."""
        key = tuple(s)
        firstSet = self._firstSetCache.get(key)
        if firstSet is None:
            result: set[Symbol] = set()
            for sym in key:
                if sym.terminal:
                    result.add(sym)
                    break
                result.update(self._firstSet[sym])
                if sym not in self._nullable:
                    break
            self._firstSetCache[key] = firstSet = frozenset(result)
        return firstSet

    def nullable_seq(self, s: Iterable[Symbol]) -> bool:
        return all(sym in self._nullable for sym in s)

    def follow(self, sym: Symbol) -> frozenset[Symbol]:
        return frozenset(self._followSet.get(sym, ()))

    def __repr__(self) -> str:
        lines = []
        for sym in sorted(self._grammar.nonterminals):
            if sym in self._nullable:
                lines.append("  %r (nullable)" % sym)
            else:
                lines.append("  %r" % sym)
            lines.append(
                "    First set: {%s}"
                % ", ".join(["%r" % t for t in sorted(self.first(sym))])
            )
            lines.append(
                "    Follow set: {%s}"
                % ", ".join(["%r" % t for t in sorted(self.follow(sym))])
            )
        return "\n".join(lines)

    # Compute the first sets for all non-terminals.
    def _firstSets(self) -> None:
        # Repeat the following loop until no more symbols can be added to any
        # first set.
        done = False
        while not done:
            done = True
            for prod in self._grammar.productions():
                firstSet = self._firstSet[prod.lhs]
                # Iterate through the RHS and merge the first sets into this
                # symbol's, until a preceding symbol is not nullable.
                for elm in prod.rhs:
                    if elm.terminal:
                        if elm not in firstSet:
                            firstSet.add(elm)
                            done = False
                        break
                    diff = self._firstSet[elm] - firstSet
                    if diff:
                        firstSet.update(diff)
                        done = False
                    if elm not in self._nullable:
                        break

    # Compute the follow sets for all symbols.
    def _followSets(self) -> None:
        self._followSet[start] = {eoi}

        # Repeat the following loop until no more symbols can be added to any
        # follow set.
        done = False
        while not done:
            done = True
            for prod in self._grammar.productions():
                for i, elm in enumerate(prod.rhs):
                    suffix = prod.rhs[i + 1:]
                    followSet = self._followSet[elm]
                    # For A ::= aBb, merge first(b) into follow(B).
                    diff: AbstractSet[Symbol] = (
                        self.first_of(suffix) - followSet
                    )
                    if diff:
                        followSet.update(diff)
                        done = False
                    # For A ::= aB, or A ::= aBb where b is nullable, merge
                    # follow(A) into follow(B).
                    if self.nullable_seq(suffix):
                        diff = self._followSet[prod.lhs] - followSet
                        if diff:
                            followSet.update(diff)
                            done = False
