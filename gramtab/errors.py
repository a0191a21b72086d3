"""
The gramtab package implements the following exception classes:

  * AnyException
  * SpecError
  * GrammarSyntaxError
  * GrammarConflictError
  * ParsingError
  * UnexpectedToken
  * NoTableEntry
  * UnexpectedEndOfInput
  * ConsistencyFault
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from gramtab.grammar import Conflict
    from gramtab.symbols import Symbol


# ============================================================================
# Begin exceptions.
#
class AnyException(Exception):
    """
    Top-level class for all exceptions thrown within the gramtab package.
    """


class SpecError(AnyException):
    """
    Specification error exception.  SpecError arises while a grammar is
    being read, or while parsing tables are being built from it.  No
    grammar or table is produced when a SpecError is raised.
    """


class GrammarSyntaxError(SpecError):
    """
    Malformed grammar text (a token other than the expected '->', '|', or
    ';'), or a reference to a non-terminal that has no rules.
    """


class GrammarConflictError(SpecError):
    """
    The grammar does not fit the requested parsing method.  All of the
    conflicts found during the table construction pass are available via
    the conflicts attribute.
    """

    def __init__(self, conflicts: Sequence[Conflict]) -> None:
        self.conflicts = list(conflicts)
        lines = [
            "%d unresolvable conflict%s"
            % (len(self.conflicts), ("s", "")[len(self.conflicts) == 1])
        ]
        lines.extend("  %r" % conflict for conflict in self.conflicts)
        super().__init__("\n".join(lines))


class ParsingError(AnyException):
    """
    Top level parse exception class, from which we derive all exceptions
    that occur during the parsing of an input token stream.
    """


class UnexpectedToken(ParsingError):
    """
    Parser syntax error.  UnexpectedToken arises when a parser detects a
    token that the table it is using does not allow at the current point
    of the input.  expected is the symbol the parser was trying to match,
    if any.
    """

    def __init__(self, token: Symbol, expected: Symbol | None = None) -> None:
        self.token = token
        self.expected = expected
        if expected is None:
            msg = "Unexpected token %r" % (token,)
        else:
            msg = "Unexpected token %r; %r expected" % (token, expected)
        super().__init__(msg)


class NoTableEntry(UnexpectedToken):
    """
    LR parser syntax error: the action table has no entry for the current
    state and lookahead symbol.
    """

    def __init__(self, state: int, token: Symbol) -> None:
        self.state = state
        super().__init__(token)
        self.args = ("No action in state %d for token %r" % (state, token),)


class UnexpectedEndOfInput(ParsingError):
    """
    The input ended while the parser still expected more of it.
    """

    def __init__(self, expected: Symbol) -> None:
        self.expected = expected
        super().__init__("Unexpected end of input; %r expected" % (expected,))


class ConsistencyFault(AssertionError):
    """
    Internal fault.  The parse stack disagrees with the production being
    reduced, which means the parsing table itself is broken.  This is not
    a ParsingError and is never caught by the parser drivers.
    """


#
# End exceptions.
# ============================================================================
