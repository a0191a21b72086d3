import os.path
import unittest


def suite() -> unittest.TestSuite:
    # gramtab/tests/test_*.py, imported as gramtab.tests.<module>.
    testsDir = os.path.dirname(os.path.abspath(__file__))
    topDir = os.path.dirname(os.path.dirname(testsDir))
    return unittest.defaultTestLoader.discover(
        testsDir, pattern="test_*.py", top_level_dir=topDir
    )
