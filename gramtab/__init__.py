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
The gramtab package builds table-driven parsers from a context-free
grammar, and runs them against a stream of tokens.

Grammars are written as whitespace-delimited rule blocks:

    S -> A c ;
    A -> a A b | ;

Symbols whose names begin with an uppercase letter are non-terminals, all
others are terminals.  Rule blocks for the same left-hand side are merged,
and an empty alternative derives the empty string.  The grammar is
augmented with the rule

    Start -> S ;

where S is the first left-hand side, unless the text defines Start
itself.  The end of the input is marked by the '$' token.

Grammar analysis (nullable symbols, FIRST and FOLLOW sets) is shared by
two table builders, each of which rejects grammars that do not fit its
method and reports every conflict it finds:

  LlTable : LL(1) predict table.

  LrTable : LR(0) automaton with either LR(0) or SLR(1) reduce actions.

The tables are read-only once built, and can be shared by any number of
parser driver instances:

  Ll : Top-down predictive parser, driven by an LlTable.

  Lr : Bottom-up shift-reduce parser, driven by an LrTable.

For example:

    grammar = gramtab.Grammar("S -> A c ; A -> a A b | ;")
    parser = gramtab.Lr(gramtab.LrTable(grammar, mode="slr"))
    result = parser.parse("a a b b c $")
    assert result.accepted
"""

from __future__ import annotations


__all__ = (
    "ConsistencyFault",
    "Grammar",
    "GrammarConflictError",
    "GrammarSource",
    "GrammarSyntaxError",
    "Ll",
    "LlTable",
    "Lr",
    "LrTable",
    "NoTableEntry",
    "ParseResult",
    "Parser",
    "ParsingError",
    "PredictConflict",
    "ReduceReduceConflict",
    "SetAnalysis",
    "ShiftReduceConflict",
    "SpecError",
    "Symbol",
    "TextGrammarSource",
    "UnexpectedEndOfInput",
    "UnexpectedToken",
    "__version__",
)

from gramtab._version import __version__
from gramtab.analysis import SetAnalysis
from gramtab.automaton import LrTable
from gramtab.errors import (
    ConsistencyFault,
    GrammarConflictError,
    GrammarSyntaxError,
    NoTableEntry,
    ParsingError,
    SpecError,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from gramtab.grammar import (
    Grammar,
    PredictConflict,
    ReduceReduceConflict,
    ShiftReduceConflict,
)
from gramtab.interfaces import GrammarSource, ParseResult, Parser
from gramtab.llparser import Ll
from gramtab.lltable import LlTable
from gramtab.lrparser import Lr
from gramtab.symbols import Symbol
from gramtab.text_source import TextGrammarSource
