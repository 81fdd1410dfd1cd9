"""Unit tests for config validators."""

import os
import shutil
import unittest

from dirbrowse.config import Config, ScopeValidator
from tests import util as tu


class TestScopeValidator(unittest.TestCase):
    """Test ScopeValidator functionality."""

    def setUp(self):
        self.logs = []
        self.validator = ScopeValidator(lambda msg, c=0: self.logs.append((msg, c)))
        self.td = tu.get_ramdisk()

    def tearDown(self):
        shutil.rmtree(self.td)

    def test_validate_roots_ok(self):
        """Test existing directories pass."""
        self.assertTrue(self.validator.validate_roots([self.td, "."]))
        self.assertEqual(self.logs, [])

    def test_validate_roots_missing(self):
        """Test a missing root fails with an error."""
        zs = os.path.join(self.td, "nope")
        self.assertFalse(self.validator.validate_roots([self.td, zs]))
        self.assertEqual(len(self.logs), 1)
        self.assertIn("nope", self.logs[0][0])
        self.assertEqual(self.logs[0][1], 1)

    def test_validate_roots_file(self):
        """Test a file is not a valid root."""
        fp = os.path.join(self.td, "f")
        tu.mkfile(fp)
        self.assertFalse(self.validator.validate_roots([fp]))

    def test_validate_scopes(self):
        """Test scopes must be absolute."""
        self.assertTrue(self.validator.validate_scopes(["/", "/pub", "/a/b"]))
        self.assertFalse(self.validator.validate_scopes(["/pub", "pub"]))
        self.assertIn("'pub'", self.logs[0][0])

    def test_drop_duplicates(self):
        """Test the first declaration of a scope is kept."""
        a = Config("/pub", "a")
        b = Config("/docs", "b")
        c = Config("/pub", "c")
        ret = self.validator.drop_duplicates([a, b, c])
        self.assertEqual(ret, [a, b])
        self.assertEqual(len(self.logs), 1)
        self.assertEqual(self.logs[0][1], 3)

    def test_drop_duplicates_none(self):
        """Test distinct scopes are all kept, in order."""
        zl = [Config("/b", "x"), Config("/a", "x")]
        self.assertEqual(self.validator.drop_duplicates(zl), zl)
        self.assertEqual(self.logs, [])


if __name__ == "__main__":
    unittest.main()
