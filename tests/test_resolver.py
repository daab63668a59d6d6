"""
Tests for stylesheet module resolution – partials, import-only files,
index files and ambiguity detection.
"""

import os
import tempfile
import unittest
from pathlib import Path

from style_rebaser.core.cache import DirectoryEntryCache
from style_rebaser.core.resolver import (
    AmbiguousImportError,
    ModuleResolver,
    candidate_names,
    check_found,
)
from style_rebaser.utils.path import path_to_file_url


class _ResolverTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        self.resolver = ModuleResolver(DirectoryEntryCache())

    def tearDown(self):
        self._tmp.cleanup()

    def touch(self, *names):
        for name in names:
            path = Path(self.root, name)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("")

    def url(self, *parts):
        return path_to_file_url(os.path.join(self.root, *parts))

    def resolve(self, name, from_import=False):
        return self.resolver.resolve(self.url(name), from_import)


class TestCandidateNames(unittest.TestCase):
    def test_without_extension(self):
        imports, defaults = candidate_names("x", None, from_import=True)
        self.assertEqual(
            defaults,
            ["x.scss", "x.sass", "x.css", "_x.scss", "_x.sass", "_x.css"],
        )
        self.assertEqual(
            imports,
            ["x.import.scss", "x.import.sass", "x.import.css",
             "_x.import.scss", "_x.import.sass", "_x.import.css"],
        )

    def test_with_extension(self):
        imports, defaults = candidate_names("x", ".sass", from_import=True)
        self.assertEqual(defaults, ["x.sass", "_x.sass"])
        self.assertEqual(imports, ["x.import.sass", "_x.import.sass"])

    def test_no_import_candidates_for_use_rules(self):
        imports, _ = candidate_names("x", None, from_import=False)
        self.assertEqual(imports, [])


class TestCheckFound(unittest.TestCase):
    def test_nothing_found(self):
        self.assertIsNone(check_found([]))

    def test_single_match(self):
        self.assertEqual(check_found(["x.css"]), "x.css")

    def test_sass_file_beats_css(self):
        self.assertEqual(check_found(["x.css", "_x.scss", "_x.css"]), "_x.scss")

    def test_two_css_files_are_ambiguous(self):
        with self.assertRaises(AmbiguousImportError):
            check_found(["x.css", "_x.css"])

    def test_two_sass_files_are_ambiguous(self):
        with self.assertRaises(AmbiguousImportError) as cm:
            check_found(["x.scss", "x.sass", "x.css"], "/styles")
        self.assertEqual(cm.exception.candidates, ["x.scss", "x.sass", "x.css"])
        self.assertEqual(cm.exception.directory, "/styles")
        self.assertIn("Ambiguous import", str(cm.exception))


class TestResolve(_ResolverTestCase):
    def test_partial_preferred_over_css(self):
        self.touch("_x.scss", "x.css")
        self.assertEqual(self.resolve("x"), self.url("_x.scss"))

    def test_plain_file(self):
        self.touch("x.sass")
        self.assertEqual(self.resolve("x"), self.url("x.sass"))

    def test_import_only_ignored_for_use(self):
        self.touch("x.import.scss", "x.scss")
        self.assertEqual(self.resolve("x", from_import=False), self.url("x.scss"))

    def test_import_only_preferred_for_import(self):
        self.touch("x.import.scss", "x.scss")
        self.assertEqual(self.resolve("x", from_import=True), self.url("x.import.scss"))

    def test_partial_import_only(self):
        self.touch("_x.import.sass", "_x.sass")
        self.assertEqual(self.resolve("x", from_import=True), self.url("_x.import.sass"))

    def test_only_import_file_not_visible_to_use(self):
        self.touch("x.import.scss")
        self.assertIsNone(self.resolve("x", from_import=False))

    def test_true_ambiguity_raises(self):
        self.touch("x.scss", "x.sass")
        with self.assertRaises(AmbiguousImportError):
            self.resolve("x")

    def test_partial_and_plain_are_ambiguous(self):
        self.touch("x.scss", "_x.scss")
        with self.assertRaises(AmbiguousImportError):
            self.resolve("x")

    def test_explicit_extension(self):
        self.touch("_x.scss", "x.sass")
        self.assertEqual(self.resolve("x.scss"), self.url("_x.scss"))

    def test_explicit_extension_with_import_only(self):
        self.touch("x.import.css", "x.css")
        self.assertEqual(self.resolve("x.css", from_import=True), self.url("x.import.css"))
        self.assertEqual(self.resolve("x.css", from_import=False), self.url("x.css"))

    def test_non_style_extension_is_part_of_name(self):
        self.touch("x.theme.scss")
        self.assertEqual(self.resolve("x.theme"), self.url("x.theme.scss"))

    def test_subdirectory(self):
        self.touch("shared/_b.scss")
        self.assertEqual(self.resolve("shared/b"), self.url("shared", "_b.scss"))

    def test_not_found(self):
        self.touch("y.scss")
        self.assertIsNone(self.resolve("x"))

    def test_missing_directory(self):
        self.assertIsNone(self.resolve("nope/x"))

    def test_non_file_url(self):
        self.assertIsNone(self.resolver.resolve("https://example.com/x.scss", False))
        self.assertIsNone(self.resolver.resolve("bootstrap/scss/variables", False))

    def test_root_url_has_no_name(self):
        self.assertIsNone(self.resolver.resolve("file:///", False))

    def test_populates_shared_cache(self):
        self.touch("x.scss")
        self.resolve("x")
        self.assertIn(self.root, self.resolver.directory_cache)


class TestIndexFallback(_ResolverTestCase):
    def test_directory_with_partial_index(self):
        self.touch("foo/_index.scss")
        self.assertEqual(self.resolve("foo"), self.url("foo", "_index.scss"))

    def test_file_wins_over_directory(self):
        self.touch("foo.scss", "foo/_index.scss")
        self.assertEqual(self.resolve("foo"), self.url("foo.scss"))

    def test_index_import_only(self):
        self.touch("foo/index.import.scss", "foo/index.scss")
        self.assertEqual(self.resolve("foo", from_import=True), self.url("foo", "index.import.scss"))

    def test_directory_without_index(self):
        self.touch("foo/other.scss")
        self.assertIsNone(self.resolve("foo"))

    def test_only_one_level_of_index(self):
        # foo/index is itself a directory with an index inside: not followed
        self.touch("foo/index/_index.scss")
        self.assertIsNone(self.resolve("foo"))

    def test_no_index_lookup_with_style_extension(self):
        self.touch("foo.scss/_index.scss")
        self.assertIsNone(self.resolve("foo.scss"))

    def test_ambiguous_index(self):
        self.touch("foo/index.scss", "foo/_index.sass")
        with self.assertRaises(AmbiguousImportError):
            self.resolve("foo")


if __name__ == "__main__":
    unittest.main()
