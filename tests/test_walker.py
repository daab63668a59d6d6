"""
End-to-end tests: walking an import graph and rebasing every stylesheet.
"""

import os
import tempfile
import unittest
from pathlib import Path

from style_rebaser.core.importers import create_importers
from style_rebaser.core.resolver import AmbiguousImportError
from style_rebaser.core.walker import StylesheetWalker, is_compiler_handled
from style_rebaser.extraction.imports import ImportReference
from style_rebaser.utils.path import path_to_file_url


class TestIsCompilerHandled(unittest.TestCase):
    def test_handled(self):
        for ref in (
            ImportReference("use", "sass:math"),
            ImportReference("import", "https://fonts.example.com/x.css"),
            ImportReference("import", "//cdn.example.com/x"),
            ImportReference("import", "theme.css"),
        ):
            with self.subTest(ref=ref):
                self.assertTrue(is_compiler_handled(ref))

    def test_resolved_by_importers(self):
        for ref in (
            ImportReference("use", "theme"),
            ImportReference("use", "theme.css"),
            ImportReference("import", "bootstrap/scss/grid"),
        ):
            with self.subTest(ref=ref):
                self.assertFalse(is_compiler_handled(ref))


class TestStylesheetWalker(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        self.src = os.path.join(self.root, "src")

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, relative, text):
        path = Path(self.root, relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path_to_file_url(path)

    def test_entry_and_partial_rebased(self):
        entry = self.write(
            "src/a.scss",
            "@import 'shared/b';\ndiv{background:url(./local.png)}\n",
        )
        partial = self.write("src/shared/_b.scss", ".b{background:url(./img.png)}")
        source_maps = {}
        walker = StylesheetWalker(create_importers(self.src, source_maps=source_maps))

        result = walker.walk(os.path.join(self.src, "a.scss"))

        self.assertEqual(list(result.loaded), [entry, partial])
        self.assertIn("url(./local.png)", result.loaded[entry].contents)
        self.assertEqual(result.loaded[partial].contents, ".b{background:url(./shared/img.png)}")
        self.assertEqual(result.missing, [])
        self.assertEqual(set(source_maps), {entry, partial})

    def test_each_stylesheet_loaded_once(self):
        self.write("src/main.scss", "@use 'a';\n@use 'b';\n")
        self.write("src/_a.scss", "@use 'b';\n")
        b = self.write("src/_b.scss", "@use 'a';\n")
        result = StylesheetWalker(create_importers(self.src)).walk(
            os.path.join(self.src, "main.scss")
        )
        self.assertEqual(len(result.loaded), 3)
        self.assertIn(b, result.loaded)

    def test_import_list_spanning_lines(self):
        self.write("src/a.scss", "@import 'x',\n  'y';\n")
        self.write("src/_x.scss", "")
        y = self.write("src/_y.scss", ".y{background:url(y.png)}")
        result = StylesheetWalker(create_importers(self.src)).walk(
            os.path.join(self.src, "a.scss")
        )
        self.assertEqual(len(result.loaded), 3)
        self.assertEqual(result.loaded[y].contents, ".y{background:url(./y.png)}")

    def test_commented_out_import_not_followed(self):
        self.write("src/a.scss", "@use 'b'; // @use 'old';\n")
        self.write("src/_b.scss", "")
        result = StylesheetWalker(create_importers(self.src)).walk(
            os.path.join(self.src, "a.scss")
        )
        self.assertEqual(len(result.loaded), 2)
        self.assertEqual(result.missing, [])

    def test_indented_stylesheet_imports(self):
        self.write("src/a.sass", "@use 'b'\n@use 'c'\n.a\n  color: red\n")
        self.write("src/_b.sass", "")
        self.write("src/_c.scss", "")
        result = StylesheetWalker(create_importers(self.src)).walk(
            os.path.join(self.src, "a.sass")
        )
        self.assertEqual(len(result.loaded), 3)

    def test_load_path_and_nested_rebase(self):
        self.write("src/main.scss", "@use 'grid';\n")
        grid = self.write("vendor/_grid.scss", ".g{background:url(img/g.png)}")
        importers = create_importers(self.src, load_paths=[os.path.join(self.root, "vendor")])
        result = StylesheetWalker(importers).walk(os.path.join(self.src, "main.scss"))
        self.assertEqual(result.loaded[grid].contents, ".g{background:url(./../vendor/img/g.png)}")

    def test_import_only_file_used_for_import_rule(self):
        self.write("src/main.scss", "@import 'theme';\n")
        import_only = self.write("src/_theme.import.scss", "")
        self.write("src/_theme.scss", "")
        result = StylesheetWalker(create_importers(self.src)).walk(
            os.path.join(self.src, "main.scss")
        )
        self.assertIn(import_only, result.loaded)

    def test_missing_and_builtin_imports(self):
        entry = self.write("src/main.scss", "@use 'sass:math';\n@use 'nowhere';\n")
        with self.assertLogs("style-rebaser", level="WARNING"):
            result = StylesheetWalker(create_importers(self.src)).walk(
                os.path.join(self.src, "main.scss")
            )
        self.assertEqual(list(result.loaded), [entry])
        self.assertEqual(result.missing, [(entry, "nowhere")])

    def test_ambiguous_import_propagates(self):
        self.write("src/main.scss", "@use 'x';\n")
        self.write("src/x.scss", "")
        self.write("src/_x.sass", "")
        with self.assertRaises(AmbiguousImportError):
            StylesheetWalker(create_importers(self.src)).walk(os.path.join(self.src, "main.scss"))

    def test_requires_importers(self):
        with self.assertRaises(ValueError):
            StylesheetWalker([])


if __name__ == "__main__":
    unittest.main()
