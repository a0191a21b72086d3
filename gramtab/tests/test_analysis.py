import unittest

import gramtab
from gramtab.symbols import Symbol, eoi, start

from gramtab.tests.specs import expr, nesting


def syms(*labels):
    return frozenset(Symbol(label) for label in labels)


class TestFirstFollow(unittest.TestCase):
    def test_expr(self):
        grammar = gramtab.Grammar(expr.GRAMMAR)
        analysis = grammar.analysis
        self.assertIs(grammar.analysis, analysis)
        self.assertEqual(grammar.nullable, syms("Ep", "Tp"))

        for label in ("E", "T", "F"):
            self.assertEqual(
                analysis.first(Symbol(label)), syms("lparen", "id")
            )
        self.assertEqual(analysis.first(Symbol("Ep")), syms("plus"))
        self.assertEqual(analysis.first(Symbol("Tp")), syms("star"))
        self.assertEqual(analysis.first(Symbol("id")), syms("id"))

        self.assertEqual(analysis.follow(start), {eoi})
        self.assertEqual(
            analysis.follow(Symbol("E")), {Symbol("rparen"), eoi}
        )
        self.assertEqual(
            analysis.follow(Symbol("Ep")), {Symbol("rparen"), eoi}
        )
        self.assertEqual(
            analysis.follow(Symbol("T")), syms("plus", "rparen") | {eoi}
        )
        self.assertEqual(
            analysis.follow(Symbol("Tp")), syms("plus", "rparen") | {eoi}
        )
        self.assertEqual(
            analysis.follow(Symbol("F")),
            syms("star", "plus", "rparen") | {eoi},
        )

    def test_sequences(self):
        grammar = gramtab.Grammar(expr.GRAMMAR)
        analysis = grammar.analysis
        Tp, Ep, F = Symbol("Tp"), Symbol("Ep"), Symbol("F")
        self.assertEqual(analysis.first_of((Tp, Ep)), syms("star", "plus"))
        self.assertTrue(analysis.nullable_seq((Tp, Ep)))
        self.assertEqual(
            analysis.first_of((Tp, F, Ep)), syms("star", "lparen", "id")
        )
        self.assertFalse(analysis.nullable_seq((Tp, F, Ep)))
        self.assertEqual(analysis.first_of(()), frozenset())
        self.assertTrue(analysis.nullable_seq(()))

    def test_nesting(self):
        grammar = gramtab.Grammar(nesting.GRAMMAR)
        analysis = grammar.analysis
        self.assertEqual(analysis.first(Symbol("S")), syms("a", "c"))
        self.assertEqual(analysis.first(Symbol("A")), syms("a"))
        self.assertEqual(analysis.follow(Symbol("S")), {eoi})
        self.assertEqual(analysis.follow(Symbol("A")), syms("b", "c"))

    def test_recursion(self):
        grammar = gramtab.Grammar("S -> S a | b ;")
        self.assertEqual(grammar.analysis.first(Symbol("S")), syms("b"))
        self.assertEqual(
            grammar.analysis.follow(Symbol("S")), syms("a") | {eoi}
        )

        grammar = gramtab.Grammar("A -> B x | y ; B -> A z | ;")
        self.assertEqual(grammar.nullable, syms("B"))
        analysis = grammar.analysis
        self.assertEqual(analysis.first(Symbol("A")), syms("x", "y"))
        self.assertEqual(analysis.first(Symbol("B")), syms("x", "y"))
        self.assertEqual(analysis.follow(Symbol("A")), syms("z") | {eoi})
        self.assertEqual(analysis.follow(Symbol("B")), syms("x"))


if __name__ == "__main__":
    unittest.main()
