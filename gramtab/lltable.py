"""
LL(1) predict table construction.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

import sys
import time

from gramtab.errors import GrammarConflictError
from gramtab.grammar import Grammar, PredictConflict
from gramtab.symbols import Symbol


class LlTable:
    """
    The LlTable class maps (non-terminal, lookahead terminal) pairs to the
    alternative that must be expanded.  The select set of an alternative is
    FIRST of its right-hand side, plus FOLLOW of its left-hand side when the
    right-hand side is nullable.  Any slot claimed by more than one
    alternative is a conflict; construction fails after reporting every
    such conflict.  A built LlTable is read-only and can be shared by
    multiple Ll parsers."""

    def __init__(
        self,
        grammar: Grammar,
        verbose: bool = False,
        logFile: Optional[str] = None,
    ) -> None:
        """
        grammar : The Grammar to build a table for.

        verbose : If true, print progress information while generating the
                  table.

        logFile : The path of a file to store a human-readable copy of the
                  table in, whether or not construction succeeds."""
        self._grammar = grammar
        self._verbose = verbose
        self._table: Dict[Tuple[Symbol, Symbol], int] = {}
        self._conflicts: List[PredictConflict] = []

        if self._verbose:
            start = time.monotonic()
            print("gramtab.LlTable: Generating LL(1) parsing table...")
        try:
            self._ll()
            self._validate(logFile)
        finally:
            if self._verbose:
                print(
                    "gramtab.LlTable: LL(1) table generation took "
                    f"{(time.monotonic() - start) * 1000:.1f} milliseconds"
                )
                sys.stdout.flush()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def conflicts(self) -> List[PredictConflict]:
        return list(self._conflicts)

    def predict(self, lhs: Symbol, token: Symbol) -> int | None:
        return self._table.get((lhs, token))

    def entries(self) -> Dict[Tuple[Symbol, Symbol], int]:
        return dict(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        lines = ["LL(1) parsing table:"]
        for (lhs, token), rhs_id in sorted(self._table.items()):
            lines.append(
                "  %15r %15r : %r"
                % (lhs, token, self._grammar.production(lhs, rhs_id))
            )
        for conflict in self._conflicts:
            lines.append("XXX %r" % conflict)
        return "\n".join(lines)

    def _ll(self) -> None:
        analysis = self._grammar.analysis
        for prod in self._grammar.productions():
            select = set(analysis.first_of(prod.rhs))
            if analysis.nullable_seq(prod.rhs):
                select.update(analysis.follow(prod.lhs))

            for token in sorted(select):
                key = (prod.lhs, token)
                existing = self._table.get(key)
                if existing is None:
                    self._table[key] = prod.rhs_id
                else:
                    self._conflicts.append(
                        PredictConflict(prod.lhs, token, existing, prod.rhs_id)
                    )

    def _validate(self, logFile: Optional[str]) -> None:
        nConflicts = len(self._conflicts)

        # Write to logFile, if one was specified.
        if logFile is not None:
            with open(logFile, "w+") as f:
                if self._verbose:
                    print("gramtab.LlTable: Writing log to '%s'..." % logFile)
                f.write("%r\n%r\n" % (self._grammar, self))

        # Conflicts are fatal.
        if nConflicts > 0:
            raise GrammarConflictError(self._conflicts)

        if self._verbose:
            print(
                "gramtab.LlTable: %d entr%s, %d production%s"
                % (
                    len(self._table),
                    ("ies", "y")[len(self._table) == 1],
                    len(list(self._grammar.productions())),
                    ("s", "")[len(list(self._grammar.productions())) == 1],
                )
            )
