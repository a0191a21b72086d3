import contextlib
import io
import os
import tempfile
import unittest

import gramtab
from gramtab.symbols import Symbol, eoi, start

from gramtab.tests.specs import arith, expr, nesting


class TestLlTable(unittest.TestCase):
    def test_nesting(self):
        grammar = gramtab.Grammar(nesting.GRAMMAR)
        table = gramtab.LlTable(grammar)
        S, A = Symbol("S"), Symbol("A")
        a, b, c = Symbol("a"), Symbol("b"), Symbol("c")
        self.assertEqual(
            table.entries(),
            {
                (start, a): 0,
                (start, c): 0,
                (S, a): 0,
                (S, c): 0,
                (A, a): 0,
                (A, b): 1,
                (A, c): 1,
            },
        )
        self.assertEqual(table.predict(A, b), 1)
        self.assertIsNone(table.predict(S, b))
        self.assertEqual(table.conflicts, [])

    def test_deterministic(self):
        grammar = gramtab.Grammar(expr.GRAMMAR)
        self.assertEqual(
            gramtab.LlTable(grammar).entries(),
            gramtab.LlTable(gramtab.Grammar(expr.GRAMMAR)).entries(),
        )

    def test_eoi_lookahead(self):
        grammar = gramtab.Grammar(expr.GRAMMAR)
        table = gramtab.LlTable(grammar)
        self.assertEqual(table.predict(Symbol("Ep"), eoi), 1)
        self.assertEqual(table.predict(Symbol("Tp"), eoi), 1)

    def test_conflicts(self):
        grammar = gramtab.Grammar(arith.GRAMMAR)
        with self.assertRaises(gramtab.GrammarConflictError) as cm:
            gramtab.LlTable(grammar)
        conflicts = cm.exception.conflicts
        for conflict in conflicts:
            self.assertIsInstance(conflict, gramtab.PredictConflict)
            self.assertEqual((conflict.existing, conflict.rhs_id), (0, 1))
        self.assertEqual(
            {(c.lhs.label, c.token.label) for c in conflicts},
            {("E", "id"), ("E", "lparen"), ("T", "id"), ("T", "lparen")},
        )
        self.assertIn("4 unresolvable conflicts", str(cm.exception))

    def test_log(self):
        fd, path = tempfile.mkstemp()
        os.close(fd)
        try:
            self.assertRaises(
                gramtab.GrammarConflictError,
                gramtab.LlTable,
                gramtab.Grammar(arith.GRAMMAR),
                logFile=path,
            )
            with open(path) as f:
                log = f.read()
        finally:
            os.unlink(path)
        self.assertIn("LL(1) parsing table:", log)
        self.assertIn("XXX Predict set conflict for non-terminal E", log)

    def test_verbose(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            gramtab.LlTable(gramtab.Grammar(expr.GRAMMAR), verbose=True)
        self.assertIn("gramtab.LlTable: Generating", out.getvalue())


class TestLl(unittest.TestCase):
    def setUp(self):
        self.nesting = gramtab.LlTable(gramtab.Grammar(nesting.GRAMMAR))
        self.expr = gramtab.LlTable(gramtab.Grammar(expr.GRAMMAR))

    def test_accept(self):
        parser = gramtab.Ll(self.nesting)
        self.assertTrue(parser.parse("a a b b c $").accepted)
        self.assertTrue(parser.parse("c $").accepted)
        self.assertTrue(parser.parse("a b c").accepted)

        parser = gramtab.Ll(self.expr)
        result = parser.parse("id plus lparen id star id rparen $")
        self.assertTrue(result)
        self.assertIsNone(result.error)

    def test_mismatch(self):
        result = gramtab.Ll(self.nesting).parse("a a b c $")
        self.assertFalse(result.accepted)
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)
        self.assertEqual(result.error.token, Symbol("c"))
        self.assertEqual(result.error.expected, Symbol("b"))

    def test_no_prediction(self):
        result = gramtab.Ll(self.expr).parse("id id $")
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)
        self.assertEqual(result.error.token, Symbol("id"))
        self.assertEqual(result.error.expected, Symbol("Tp"))

    def test_end_of_input(self):
        result = gramtab.Ll(self.expr).parse("id plus")
        self.assertIsInstance(result.error, gramtab.UnexpectedEndOfInput)
        self.assertEqual(result.error.expected, Symbol("T"))

        result = gramtab.Ll(self.nesting).parse("a a b")
        self.assertIsInstance(result.error, gramtab.UnexpectedEndOfInput)
        self.assertEqual(result.error.expected, Symbol("b"))

    def test_unexpected_eoi_token(self):
        # An explicit '$' is a lookahead token, not the end of the input.
        result = gramtab.Ll(self.expr).parse("id plus $")
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)
        self.assertEqual(result.error.token, eoi)
        self.assertEqual(result.error.expected, Symbol("T"))

        result = gramtab.Ll(self.nesting).parse("a a b $")
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)
        self.assertEqual(result.error.token, eoi)
        self.assertEqual(result.error.expected, Symbol("b"))

        parser = gramtab.Ll(self.nesting)
        parser.token("a")
        self.assertRaises(gramtab.UnexpectedToken, parser.token, "$")
        parser.reset()
        parser.token("a")
        self.assertRaises(gramtab.UnexpectedEndOfInput, parser.eoi)

    def test_trailing_input(self):
        result = gramtab.Ll(self.nesting).parse("c c $")
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)
        self.assertIsNone(result.error.expected)

        result = gramtab.Ll(self.nesting).parse("c $ c")
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)

    def test_incremental(self):
        parser = gramtab.Ll(self.nesting)
        for tok in ("a", Symbol("b"), "c"):
            parser.token(tok)
        self.assertFalse(parser.accepted)
        parser.eoi()
        self.assertTrue(parser.accepted)
        self.assertRaises(gramtab.UnexpectedToken, parser.token, "a")

        parser.reset()
        self.assertFalse(parser.accepted)
        self.assertRaises(gramtab.UnexpectedToken, parser.token, "b")

    def test_verbose(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            parser = gramtab.Ll(self.nesting, verbose=True)
            parser.parse("a b c $")
        self.assertIn("STACK: Start", out.getvalue())
        self.assertIn("--> accept", out.getvalue())


if __name__ == "__main__":
    unittest.main()
