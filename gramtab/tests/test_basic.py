import unittest

import gramtab

from gramtab.tests import suite
from gramtab.tests.specs import nesting


class TestGramtab(unittest.TestCase):
    def test_basic_ll(self):
        grammar = gramtab.Grammar(nesting.GRAMMAR)
        parser = gramtab.Ll(gramtab.LlTable(grammar))

        result = parser.parse("a a b b c $")
        self.assertTrue(result.accepted)
        self.assertIsNone(result.error)

        result = parser.parse("a a b c $")
        self.assertFalse(result.accepted)
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)

    def test_basic_lr(self):
        grammar = gramtab.Grammar(nesting.GRAMMAR)
        parser = gramtab.Lr(gramtab.LrTable(grammar, mode="slr"))

        result = parser.parse("a a b b c $")
        self.assertTrue(result.accepted)
        self.assertIsNone(result.error)

        result = parser.parse("a a b c $")
        self.assertFalse(result.accepted)
        self.assertIsInstance(result.error, gramtab.UnexpectedToken)

    def test_shared_grammar(self):
        grammar = gramtab.Grammar(nesting.GRAMMAR)
        ll = gramtab.Ll(gramtab.LlTable(grammar))
        lr = gramtab.Lr(gramtab.LrTable(grammar))
        for text in ("c $", "a b c $", "a a a b b b c $"):
            with self.subTest(text=text):
                self.assertTrue(ll.parse(text))
                self.assertTrue(lr.parse(text))
        for text in ("a c $", "b c $", "a b $", "c c $"):
            with self.subTest(text=text):
                self.assertFalse(ll.parse(text))
                self.assertFalse(lr.parse(text))

    def test_suite(self):
        ids = set()
        pending = [suite()]
        while pending:
            for test in pending.pop():
                if isinstance(test, unittest.TestSuite):
                    pending.append(test)
                else:
                    ids.add(test.id())
        self.assertIn(
            "gramtab.tests.test_basic.TestGramtab.test_basic_lr", ids
        )
        self.assertIn(
            "gramtab.tests.test_ll.TestLl.test_unexpected_eoi_token", ids
        )


if __name__ == "__main__":
    unittest.main()
