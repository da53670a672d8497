# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring,disable=missing-class-docstring,invalid-name

import json

from typer.testing import CliRunner

from osdd.__main__ import app, SubstringFilter
from tests import OsddTestCase


class TestCommandLine(OsddTestCase):

    def setUp(self):
        super().setUp()
        self.runner = CliRunner()

    def test_substring_filter(self):
        keep = SubstringFilter(["ebay", ""])
        self.assertTrue(keep("ht", "1"))
        self.assertFalse(keep("ebaytag1", "x"))
        self.assertFalse(keep("from", "ebay-toolbar"))

    def test_parse(self):
        result = self.runner.invoke(app, ["parse", str(self.OSDD_FOLDER / "wikipedia.xml")])
        self.assertEqual(result.exit_code, 0, result.output)
        engine = json.loads(result.output)
        self.assertEqual(engine["short_name"], "Wikipedia (English)")
        self.assertEqual(engine["input_encodings"], ["UTF-8", "Shift_JIS"])
        self.assertEqual(
            engine["search_url"]["url"],
            "http://en.wikipedia.org/w/index.php?title=Special:Search&search={searchTerms}",
        )

    def test_parse_exclude(self):
        result = self.runner.invoke(
            app, ["parse", str(self.OSDD_FOLDER / "firefox_yahoo.xml"), "--exclude", "Mozilla"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        engine = json.loads(result.output)
        self.assertEqual(engine["search_url"]["url"], "http://search.yahoo.com/search?p={searchTerms}&ei=UTF-8")

    def test_parse_error(self):
        result = self.runner.invoke(app, ["parse", str(self.OSDD_FOLDER / "post.xml")])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("MissingRequiredFieldException", result.output)

    def test_expand(self):
        result = self.runner.invoke(app, ["expand", str(self.OSDD_FOLDER / "dictionary.xml"), "hello world"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "http://dictionary.reference.com/browse/hello%20world?r=75")

    def test_expand_suggestions(self):
        result = self.runner.invoke(
            app, ["expand", str(self.OSDD_FOLDER / "wikipedia.xml"), "a b", "--suggestions"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "http://en.wikipedia.org/w/api.php?action=opensearch&search=a+b")

    def test_expand_without_suggestions(self):
        result = self.runner.invoke(
            app, ["expand", str(self.OSDD_FOLDER / "post_suggestion.xml"), "x", "--suggestions"]
        )
        self.assertEqual(result.exit_code, 1)
