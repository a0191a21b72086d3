"""
The classes in this module compute the canonical collection of LR(0) item
sets for a grammar, and from it an LR(0) or SLR(1) parsing table.
"""
from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Literal,
    Optional,
    Tuple,
)

import collections
import sys
import time

from gramtab.errors import GrammarConflictError
from gramtab.grammar import (
    Grammar,
    Item,
    Action,
    ShiftAction,
    ReduceAction,
    AcceptAction,
    Conflict,
    ShiftReduceConflict,
    ReduceReduceConflict,
)
from gramtab.symbols import Symbol, start, eoi

if TYPE_CHECKING:
    Mode = Literal["lr0", "slr"]

    Kernel = Tuple[Item, ...]


MODES = ("lr0", "slr")


def canonical(items: Iterable[Item]) -> Kernel:
    """Sorted, duplicate-free form of a kernel, used as the state key."""
    return tuple(sorted(set(items)))


class ItemSet:
    """
    One automaton state.  kernel holds the items that seeded the state;
    closure holds the items that were added by expanding the non-terminals
    that kernel items expect.  Two item sets are the same state iff their
    kernels are equal."""

    def __init__(self, id: int, kernel: Iterable[Item]) -> None:
        self.id = id
        self.kernel = canonical(kernel)
        self.closure: Tuple[Item, ...] = ()

    def __repr__(self) -> str:
        return "ItemSet(%d, kernel: %s, closure: %s)" % (
            self.id,
            ", ".join(["%r" % item for item in self.kernel]),
            ", ".join(["%r" % item for item in self.closure]),
        )

    def __len__(self) -> int:
        return len(self.kernel)

    def __hash__(self) -> int:
        return hash(self.kernel)

    def __eq__(self, other: Any) -> bool:
        if type(other) is ItemSet:
            return self.kernel == other.kernel
        else:
            return NotImplemented

    def __iter__(self) -> Iterator[Item]:
        for item in self.kernel:
            yield item
        for item in self.closure:
            yield item

    # Calculate the kernel's transitive closure.
    def close(self, grammar: Grammar) -> None:
        seen = set(self.kernel)
        added: List[Item] = []
        # Iterate over the items until no more can be added to the closure.
        worklist = list(self.kernel)
        i = 0
        while i < len(worklist):
            sym = worklist[i].symbol
            if sym is not None and not sym.terminal:
                for prod in grammar.alternatives(sym):
                    tItem = prod.item(0)
                    if tItem not in seen:
                        seen.add(tItem)
                        added.append(tItem)
                        worklist.append(tItem)
            i += 1
        self.closure = tuple(added)

    # Calculate the kernels of all goto sets, keyed by the symbol that is
    # consumed to reach them.  Symbols appear in the order of first use.
    def goto(self) -> Dict[Symbol, List[Item]]:
        symMap: Dict[Symbol, List[Item]] = {}
        for item in self:
            sym = item.symbol
            if sym is not None:
                symMap.setdefault(sym, []).append(item.advance())
        return symMap


class LrTable:
    """
    The LrTable class contains the read-only data structures that the Lr
    parser needs in order to parse input.  A single table can be shared by
    multiple Lr parser instances.

    Two modes are supported, which differ only in which lookahead symbols
    a completed item reduces on:

      lr0 : Every symbol, regardless of lookahead.

      slr : FOLLOW of the item's left-hand side, plus end-of-input.

    The table is a mapping from (state, symbol) to an action.  Shift
    entries exist for non-terminals as well as for terminals, since after
    a reduction the parser feeds the reduced non-terminal back in as its
    next input symbol."""

    def __init__(
        self,
        grammar: Grammar,
        mode: Mode = "slr",
        verbose: bool = False,
        logFile: Optional[str] = None,
    ) -> None:
        """
        grammar : The Grammar to build a table for.

        mode : "lr0" or "slr".

        verbose : If true, print progress information while generating the
                  parsing table.

        logFile : The path of a file to store a human-readable copy of the
                  automaton and parsing table in, whether or not
                  construction succeeds."""
        if mode not in MODES:
            raise ValueError(
                "Unknown LR table mode %r; expected one of %s"
                % (mode, ", ".join(MODES))
            )
        self._grammar = grammar
        self._mode = mode
        self._verbose = verbose

        # Each element is the state whose id is its index.
        self._itemSets: List[ItemSet] = []
        # Canonical kernels, mapped to state ids.
        self._itemSetsHash: Dict[Kernel, int] = {}
        # Automaton transitions: (state, symbol) --> state.
        self._edges: Dict[Tuple[int, Symbol], int] = {}
        # LR parsing table.  If no entry exists for a (state, symbol) pair,
        # then input of that symbol is an error in that state.
        self._action: Dict[Tuple[int, Symbol], Action] = {}
        self._conflicts: List[Conflict] = []
        self._acceptState: int | None = None
        self._lr0Set: List[Symbol] | None = None

        if self._verbose:
            start_time = time.monotonic()
            print(
                "gramtab.LrTable: %d terminal%s, %d non-terminal%s, "
                "%d production%s"
                % (
                    len(grammar.terminals),
                    ("s", "")[len(grammar.terminals) == 1],
                    len(grammar.nonterminals),
                    ("s", "")[len(grammar.nonterminals) == 1],
                    len(list(grammar.productions())),
                    ("s", "")[len(list(grammar.productions())) == 1],
                )
            )
        try:
            self._items()
            self._lr()
            self._validate(logFile)
        finally:
            if self._verbose:
                kind = ("LR(0)", "SLR(1)")[self._mode == "slr"]
                print(
                    f"gramtab.LrTable: {kind} parser generation took "
                    f"{(time.monotonic() - start_time) * 1000:.1f} "
                    "milliseconds"
                )
                sys.stdout.flush()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def startState(self) -> int:
        return 0

    @property
    def acceptState(self) -> int:
        assert self._acceptState is not None
        return self._acceptState

    @property
    def conflicts(self) -> List[Conflict]:
        return list(self._conflicts)

    def states(self) -> List[ItemSet]:
        return list(self._itemSets)

    def action(self, state: int, sym: Symbol) -> Action | None:
        return self._action.get((state, sym))

    def actions(self) -> Dict[Tuple[int, Symbol], Action]:
        return dict(self._action)

    def transition(self, state: int, sym: Symbol) -> int | None:
        return self._edges.get((state, sym))

    def __repr__(self) -> str:
        nstates = len(self._itemSets)
        lines = [
            "gramtab.LrTable: %d state%s, %d action%s (%s)"
            % (
                nstates,
                ("s", "")[nstates == 1],
                len(self._action),
                ("s", "")[len(self._action) == 1],
                self._mode,
            )
        ]

        conflicts: Dict[Tuple[int, Symbol], List[Conflict]] = {}
        for conflict in self._conflicts:
            assert isinstance(
                conflict, (ShiftReduceConflict, ReduceReduceConflict)
            )
            key = (conflict.state, conflict.symbol)
            conflicts.setdefault(key, []).append(conflict)

        rows: Dict[int, List[Tuple[Symbol, Action]]] = {}
        for (i, sym), action in sorted(
            self._action.items(), key=lambda kv: kv[0]
        ):
            rows.setdefault(i, []).append((sym, action))

        for itemSet in self._itemSets:
            i = itemSet.id
            lines.append("  %s" % ("=" * 78))
            if i == 0:
                lines.append("  State %d: (start state)" % i)
            elif i == self._acceptState:
                lines.append("  State %d: (accept state)" % i)
            else:
                lines.append("  State %d:" % i)
            for item in itemSet.kernel:
                lines.append("    %r" % item)
            if itemSet.closure:
                lines.append("    %s" % ("-" * 30))
                for item in itemSet.closure:
                    lines.append("    %r" % item)
            lines.append("    Action:")
            for sym, action in rows.get(i, []):
                if (i, sym) in conflicts:
                    lines.append("XXX %15r : %r" % (sym, action))
                    for conflict in conflicts[(i, sym)]:
                        assert isinstance(
                            conflict,
                            (ShiftReduceConflict, ReduceReduceConflict),
                        )
                        lines.append("XXX %15r : %r" % (sym, conflict.reduce))
                else:
                    lines.append("    %15r : %r" % (sym, action))

        return "\n".join(lines)

    # Compute the collection of sets of LR(0) items.
    def _items(self) -> None:
        # Add {[Start ::= * S]} to _itemSets.
        tItem = self._grammar.production(start, 0).item(0)
        tItemSet = ItemSet(0, (tItem,))
        tItemSet.close(self._grammar)
        self._itemSets.append(tItemSet)
        self._itemSetsHash[tItemSet.kernel] = 0

        # List of state numbers that need to be processed.  Each kernel is
        # entered here exactly once, when its state is created.
        worklist = collections.deque([0])
        if self._verbose:
            print(
                "gramtab.LrTable: Generating LR(0) itemset collection... ",
                end=" ",
            )
            sys.stdout.write("+")
            sys.stdout.flush()

        while worklist:
            i = worklist.popleft()
            itemSet = self._itemSets[i]
            for sym, items in itemSet.goto().items():
                kernel = canonical(items)
                j = self._itemSetsHash.get(kernel)
                if j is None:
                    j = len(self._itemSets)
                    gotoSet = ItemSet(j, kernel)
                    gotoSet.close(self._grammar)
                    self._itemSets.append(gotoSet)
                    self._itemSetsHash[kernel] = j
                    worklist.append(j)
                    if self._verbose:
                        sys.stdout.write("+")
                        sys.stdout.flush()
                self._edges[(i, sym)] = j

        if self._verbose:
            sys.stdout.write("\n")
            sys.stdout.flush()

    # Compute LR parsing table.
    def _lr(self) -> None:
        assert len(self._itemSets) > 0
        assert len(self._action) == 0
        assert len(self._conflicts) == 0

        # X ::= a*Ab: shift, or goto after reducing A.
        for (i, sym), j in self._edges.items():
            self._action[(i, sym)] = ShiftAction(j)

        # Start ::= S*: accept at end of input.  The start item is never
        # reduced.
        self._acceptState = self._edges[(0, self._grammar.startSym)]
        assert (self._acceptState, eoi) not in self._action
        self._action[(self._acceptState, eoi)] = AcceptAction()

        # X ::= a*
        for itemSet in self._itemSets:
            for item in itemSet:
                if item.bookmark is not None or item.lhs == start:
                    continue
                reduce = ReduceAction(item.production)
                for sym in self._reduceSet(item):
                    self._actionAppend(itemSet.id, sym, reduce)

    def _reduceSet(self, item: Item) -> List[Symbol]:
        if self._mode == "lr0":
            if self._lr0Set is None:
                self._lr0Set = sorted(self._grammar.terminals)
                self._lr0Set += sorted(self._grammar.nonterminals - {start})
                self._lr0Set.append(eoi)
            return self._lr0Set
        else:
            followSet = set(self._grammar.analysis.follow(item.lhs))
            followSet.add(eoi)
            return sorted(followSet)

    # Add a reduce action to the table, or record a conflict if the slot is
    # already taken.
    def _actionAppend(
        self, state: int, sym: Symbol, reduce: ReduceAction
    ) -> None:
        key = (state, sym)
        existing = self._action.get(key)
        if existing is None:
            self._action[key] = reduce
        elif isinstance(existing, ReduceAction):
            self._conflicts.append(
                ReduceReduceConflict(state, sym, existing, reduce)
            )
        else:
            self._conflicts.append(
                ShiftReduceConflict(state, sym, existing, reduce)
            )

    def _validate(self, logFile: Optional[str]) -> None:
        if self._verbose:
            print("gramtab.LrTable: Validating grammar...")

        lines = []
        nConflicts = len(self._conflicts)
        if nConflicts > 0:
            lines.append(
                "gramtab.LrTable: %d unresolvable conflict%s"
                % (nConflicts, ("s", "")[nConflicts == 1])
            )

        # Productions that no state ever reaches.
        used = set()
        for itemSet in self._itemSets:
            for item in itemSet:
                used.add(item.production)
        nUnused = 0
        for production in self._grammar.productions():
            if production not in used:
                nUnused += 1
                lines.append(
                    "gramtab.LrTable: Unused production: %r" % production
                )
        if nUnused > 0:
            lines.insert(
                (1, 0)[nConflicts == 0],
                "gramtab.LrTable: %d unused definition%s"
                % (nUnused, ("s", "")[nUnused == 1]),
            )

        # Write to logFile, if one was specified.
        if logFile is not None:
            with open(logFile, "w+") as f:
                if self._verbose:
                    print("gramtab.LrTable: Writing log to '%s'..." % logFile)
                f.write("%s" % "\n".join(lines + ["%r" % self]))

        # Conflicts are fatal.
        if nConflicts > 0:
            if self._verbose:
                sys.stdout.write("%s\n" % "\n".join(lines))
            raise GrammarConflictError(self._conflicts)

        if self._verbose:
            lines.append(
                "gramtab.LrTable: %d state%s, %d action%s"
                % (
                    len(self._itemSets),
                    ("s", "")[len(self._itemSets) == 1],
                    len(self._action),
                    ("s", "")[len(self._action) == 1],
                )
            )
            sys.stdout.write("%s\n" % "\n".join(lines))
