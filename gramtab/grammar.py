# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
This module contains the grammar itself, along with the value classes that
the table builders share: productions, LR items, parser actions, and
conflict records.
"""

from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
)

from gramtab.analysis import SetAnalysis
from gramtab.errors import GrammarSyntaxError
from gramtab.interfaces import GrammarSource
from gramtab.symbols import Symbol, start, eoi
from gramtab.text_source import TextGrammarSource


class Production:
    """
    One alternative of a non-terminal.  rhs_id is the alternative's index
    among the rules for lhs, in the order they were defined."""

    def __init__(
        self, lhs: Symbol, rhs_id: int, rhs: Sequence[Symbol]
    ) -> None:
        self.lhs = lhs
        self.rhs_id = rhs_id
        self.rhs: Tuple[Symbol, ...] = tuple(rhs)

    def __hash__(self) -> int:
        return hash((self.lhs, self.rhs_id))

    def __eq__(self, other: Any) -> bool:
        if type(other) is Production:
            return self.lhs == other.lhs and self.rhs_id == other.rhs_id
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if type(other) is Production:
            return (self.lhs, self.rhs_id) < (other.lhs, other.rhs_id)
        else:
            return NotImplemented

    def __len__(self) -> int:
        return len(self.rhs)

    def __repr__(self) -> str:
        return "%r ::= %s." % (
            self.lhs,
            " ".join(["%r" % elm for elm in self.rhs]),
        )

    def item(self, pos: int) -> Item:
        assert 0 <= pos <= len(self.rhs)
        if pos == len(self.rhs):
            return Item(self, None)
        return Item(self, pos)


class Item:
    """
    LR(0) item: a production plus a bookmark.  bookmark is the index of the
    next right-hand-side symbol to be matched, or None once the whole
    alternative has been matched and the item is ready to reduce.

    Items are immutable; identity is (lhs, rhs_id, bookmark)."""

    def __init__(
        self, production: Production, bookmark: Optional[int]
    ) -> None:
        self.production = production
        self.bookmark = bookmark
        pos = len(production.rhs) if bookmark is None else bookmark
        self._key = (production.lhs, production.rhs_id, pos)

    @property
    def lhs(self) -> Symbol:
        return self.production.lhs

    @property
    def rhs_id(self) -> int:
        return self.production.rhs_id

    @property
    def symbol(self) -> Symbol | None:
        """The symbol after the bookmark, if any."""
        if self.bookmark is None:
            return None
        return self.production.rhs[self.bookmark]

    def advance(self) -> Item:
        assert self.bookmark is not None
        return self.production.item(self.bookmark + 1)

    def __hash__(self) -> int:
        return hash(self._key)

    def __eq__(self, other: Any) -> bool:
        if type(other) is Item:
            return self._key == other._key
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if type(other) is Item:
            return self._key < other._key
        else:
            return NotImplemented

    def __repr__(self) -> str:
        strs = ["[%r ::=" % self.lhs]
        rhs = self.production.rhs
        for i, sym in enumerate(rhs):
            if i == self.bookmark:
                strs.append(" *")
            strs.append(" %r" % sym)
        if self.bookmark is None:
            strs.append(" *")
        strs.append("]")
        return "".join(strs)


class Action:
    """
    Abstract base class, subclassed by {Shift,Reduce,Accept}Action."""

    def __init__(self) -> None:
        pass


class ShiftAction(Action):
    """
    Shift action, with associated nextState.  The same action doubles as
    the goto transition taken after a reduction."""

    def __init__(self, nextState: int) -> None:
        super().__init__()
        self.nextState = nextState

    def __repr__(self) -> str:
        return "[shift %r]" % self.nextState

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ShiftAction):
            return False
        if self.nextState != other.nextState:
            return False
        return True


class ReduceAction(Action):
    """
    Reduce action, with associated production."""

    def __init__(self, production: Production) -> None:
        super().__init__()
        self.production = production

    @property
    def lhs(self) -> Symbol:
        return self.production.lhs

    @property
    def rhs_id(self) -> int:
        return self.production.rhs_id

    def __repr__(self) -> str:
        return "[reduce %r]" % self.production

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReduceAction):
            return False
        if self.production != other.production:
            return False
        return True


class AcceptAction(Action):
    def __repr__(self) -> str:
        return "[accept]"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AcceptAction)


class Conflict:
    """
    Abstract base class for the diagnostic records that are collected
    while building parsing tables, and reported together via
    GrammarConflictError."""


class PredictConflict(Conflict):
    """
    Two alternatives of lhs both predict token in the LL(1) table."""

    def __init__(
        self, lhs: Symbol, token: Symbol, existing: int, rhs_id: int
    ) -> None:
        self.lhs = lhs
        self.token = token
        self.existing = existing
        self.rhs_id = rhs_id

    def __repr__(self) -> str:
        return (
            "Predict set conflict for non-terminal %r with next symbol %r "
            "(alternatives %d and %d)"
            % (self.lhs, self.token, self.existing, self.rhs_id)
        )


class ShiftReduceConflict(Conflict):
    def __init__(
        self,
        state: int,
        symbol: Symbol,
        existing: Action,
        reduce: ReduceAction,
    ) -> None:
        self.state = state
        self.symbol = symbol
        self.existing = existing
        self.reduce = reduce

    def __repr__(self) -> str:
        return "State %d, symbol %r: shift/reduce conflict: %r vs %r" % (
            self.state,
            self.symbol,
            self.existing,
            self.reduce,
        )


class ReduceReduceConflict(Conflict):
    def __init__(
        self,
        state: int,
        symbol: Symbol,
        existing: ReduceAction,
        reduce: ReduceAction,
    ) -> None:
        self.state = state
        self.symbol = symbol
        self.existing = existing
        self.reduce = reduce

    def __repr__(self) -> str:
        return "State %d, symbol %r: reduce/reduce conflict: %r vs %r" % (
            self.state,
            self.symbol,
            self.existing,
            self.reduce,
        )


class Grammar:
    """
    A context-free grammar.  Grammars are built from grammar text (or any
    other GrammarSource), validated, and augmented with the distinguished
    rule

      Start ::= S.

    where S is the user's start symbol.  If the source does not define
    Start itself, S is the left-hand side of the first rule.  Once built, a
    Grammar is never modified, so it can be shared by any number of tables
    and parsers.
    """

    def __init__(self, source: str | GrammarSource) -> None:
        if isinstance(source, str):
            source = TextGrammarSource(source)

        self._productions: Dict[Symbol, List[Production]] = {}
        self._terminals: set[Symbol] = set()
        self._nonterminals: set[Symbol] = set()
        self._analysis: SetAnalysis | None = None

        rules = source.get_rules()
        if not rules:
            raise GrammarSyntaxError("Empty grammar specification")

        # Rule blocks for the same left-hand side are merged, in order.
        merged: Dict[Symbol, List[Tuple[Symbol, ...]]] = {}
        for lhs, alternatives in rules:
            if lhs.terminal:
                raise GrammarSyntaxError(
                    "Terminal %r used as the left-hand side of a rule" % lhs
                )
            merged.setdefault(lhs, []).extend(
                tuple(rhs) for rhs in alternatives
            )

        self._augment(merged, rules[0][0])

        # Resolve references in the grammar specification.
        self._references()

        self._nullable = self._nullableSet()

    @classmethod
    def from_file(cls, path: str) -> Grammar:
        with open(path) as f:
            return cls(f.read())

    @property
    def startSym(self) -> Symbol:
        """The user's start symbol (the right-hand side of Start)."""
        return self._startSym

    @property
    def terminals(self) -> frozenset[Symbol]:
        return frozenset(self._terminals)

    @property
    def nonterminals(self) -> frozenset[Symbol]:
        return frozenset(self._nonterminals)

    @property
    def nullable(self) -> frozenset[Symbol]:
        return self._nullable

    @property
    def analysis(self) -> SetAnalysis:
        """FIRST/FOLLOW sets, computed on first use."""
        if self._analysis is None:
            self._analysis = SetAnalysis(self)
        return self._analysis

    def alternatives(self, lhs: Symbol) -> List[Production]:
        return self._productions[lhs]

    def production(self, lhs: Symbol, rhs_id: int) -> Production:
        return self._productions[lhs][rhs_id]

    def productions(self) -> Iterator[Production]:
        for prods in self._productions.values():
            for prod in prods:
                yield prod

    def __contains__(self, sym: Symbol) -> bool:
        return sym in self._productions

    def __repr__(self) -> str:
        lines = ["Grammar:"]
        for prod in self.productions():
            lines.append("  %r" % prod)
        return "\n".join(lines)

    def _augment(
        self,
        rules: Dict[Symbol, List[Tuple[Symbol, ...]]],
        first: Symbol,
    ) -> None:
        if start in rules:
            alternatives = rules.pop(start)
            if len(alternatives) != 1:
                raise GrammarSyntaxError(
                    "%r must have exactly one alternative, not %d"
                    % (start, len(alternatives))
                )
            rhs = alternatives[0]
            # Start -> S $ ; is accepted as a spelling of Start -> S ;.
            if len(rhs) == 2 and rhs[1] == eoi:
                rhs = rhs[:1]
            if len(rhs) != 1 or rhs[0].terminal:
                raise GrammarSyntaxError(
                    "%r must derive exactly one non-terminal: %s"
                    % (start, " ".join(["%r" % sym for sym in rhs]))
                )
            self._startSym = rhs[0]
        else:
            self._startSym = first

        # Augment grammar with a special start symbol and production:
        #
        #   Start ::= S.
        self._productions[start] = [Production(start, 0, (self._startSym,))]
        for lhs, alternatives in rules.items():
            self._productions[lhs] = [
                Production(lhs, i, rhs) for i, rhs in enumerate(alternatives)
            ]

    def _references(self) -> None:
        undefined: List[Symbol] = []
        for prod in self.productions():
            self._nonterminals.add(prod.lhs)
            for sym in prod.rhs:
                if sym == start:
                    raise GrammarSyntaxError(
                        "%r may not appear on a right-hand side: %r"
                        % (start, prod)
                    )
                if sym == eoi:
                    raise GrammarSyntaxError(
                        "End-of-input marker %r is only allowed at the end "
                        "of the %r rule: %r" % (eoi, start, prod)
                    )
                if sym.terminal:
                    self._terminals.add(sym)
                else:
                    self._nonterminals.add(sym)
                    if sym not in self._productions and sym not in undefined:
                        undefined.append(sym)

        if undefined:
            raise GrammarSyntaxError(
                "Undefined non-terminal%s: %s"
                % (
                    ("s", "")[len(undefined) == 1],
                    ", ".join(["%r" % sym for sym in undefined]),
                )
            )

    # Compute the set of non-terminals that derive the empty string.
    def _nullableSet(self) -> frozenset[Symbol]:
        nullable = set()
        for prod in self.productions():
            if len(prod.rhs) == 0:
                nullable.add(prod.lhs)

        # Repeat the following loop until no more symbols can be added.
        done = False
        while not done:
            done = True
            for prod in self.productions():
                if prod.lhs in nullable:
                    continue
                if all(sym in nullable for sym in prod.rhs):
                    nullable.add(prod.lhs)
                    done = False
        return frozenset(nullable)
