# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring,disable=missing-class-docstring,invalid-name

import os
from unittest.mock import patch, Mock

from parameterized import parameterized

import osdd
from osdd import url_builder
from osdd.template_url import TemplateURLRef
from tests import OsddTestCase


class TestUrlBuilder(OsddTestCase):

    @parameterized.expand(
        [
            ("", "search"),
            ("text/html", "search"),
            ("application/rss+xml", "search"),
            ("application/x-suggestions+json", "suggestion"),
            (" Application/X-Suggestions+JSON ", "suggestion"),
            ("application/x-suggestions+xml", "suggestion"),
        ]
    )
    def test_url_role(self, url_type, role):
        self.assertEqual(url_builder.url_role(url_type), role)

    def test_url_role_from_settings(self):
        with patch.dict(os.environ, {'OSDD_SETTINGS_PATH': str(self.SETTINGS_FOLDER / "user_settings_simple.yml")}):
            osdd.init_settings()
        self.assertEqual(url_builder.url_role("application/json"), "suggestion")
        self.assertEqual(url_builder.url_role("application/x-suggestions+xml"), "search")

    @parameterized.expand(
        [
            ("", "GET"),
            ("get", "GET"),
            ("GET", "GET"),
            ("post", "POST"),
            ("POST", "POST"),
            ("Post", "POST"),
            ("put", "GET"),
        ]
    )
    def test_parse_method(self, method, expected):
        self.assertEqual(url_builder.parse_method(method), expected)

    @parameterized.expand(
        [
            ("http://x.org/", True),
            ("HTTPS://x.org/", True),
            ("ftp://x.org/", False),
            ("javascript:alert(1)", False),
            ("/relative", False),
            ("http://[::1/", False),
            ("http:?q={searchTerms}", False),
            ("http:///search?q={searchTerms}", False),
            ("https:search", False),
            ("http://{language?}.x.org/?q={searchTerms}", True),
        ]
    )
    def test_is_http_url(self, template, expected):
        self.assertEqual(url_builder.is_http_url(template), expected)

    def test_format_parameter(self):
        self.assertEqual(url_builder.format_parameter("q", "{searchTerms}"), "q={searchTerms}")
        self.assertEqual(url_builder.format_parameter("p", "{startPage?}"), "p={startPage?}")
        self.assertEqual(url_builder.format_parameter("s", "a/b c"), "s=a%2Fb%20c")
        self.assertEqual(url_builder.format_parameter("s", "x{searchTerms}"), "s=x%7BsearchTerms%7D")

    @parameterized.expand(
        [
            ("http://x.org/s", ["a=1", "b=2"], "http://x.org/s?a=1&b=2"),
            ("http://x.org/s?", ["a=1"], "http://x.org/s?a=1"),
            ("http://x.org/s?q=1", ["a=1"], "http://x.org/s?q=1&a=1"),
            ("http://x.org/s?q=1&", ["a=1"], "http://x.org/s?q=1&a=1"),
            ("http://x.org/s#top", ["a=1"], "http://x.org/s?a=1#top"),
            ("http://x.org/s?q=1", [], "http://x.org/s?q=1"),
            ("http://x.org/{startPage?}/search", ["q={searchTerms}"], "http://x.org/{startPage?}/search?q={searchTerms}"),
            ("http://x.org/{lang?}", ["q={searchTerms}"], "http://x.org/{lang?}?q={searchTerms}"),
            ("http://x.org/s?l={lang?}", ["q={searchTerms}"], "http://x.org/s?l={lang?}&q={searchTerms}"),
            ("http://x.org/{p?}#top", ["a=1"], "http://x.org/{p?}?a=1#top"),
        ]
    )
    def test_append_parameters(self, base, parameters, expected):
        self.assertEqual(url_builder.append_parameters(base, parameters), expected)

    def test_build(self):
        url = url_builder.build_template_url(
            " http://x.org/search ",
            "GET",
            [("q", "{searchTerms}"), ("ie", "UTF-8")],
        )
        self.assertEqual(url, TemplateURLRef(url="http://x.org/search?q={searchTerms}&ie=UTF-8"))

    def test_build_with_filter(self):
        keep = Mock(side_effect=lambda name, value: name != "sourceid")
        url = url_builder.build_template_url(
            "http://x.org/search",
            "GET",
            [("sourceid", "Mozilla"), ("q", "{searchTerms}")],
            keep,
        )
        self.assertEqual(url.url, "http://x.org/search?q={searchTerms}")
        self.assertEqual(keep.call_count, 2)
        keep.assert_any_call("sourceid", "Mozilla")
        keep.assert_any_call("q", "{searchTerms}")

    @parameterized.expand(
        [
            ("post", "http://x.org/search", "POST"),
            ("empty", "  ", "GET"),
            ("scheme", "file:///etc/passwd", "GET"),
        ]
    )
    def test_rejected_before_filter(self, _name, template, method):
        keep = Mock(return_value=True)
        self.assertIsNone(url_builder.build_template_url(template, method, [("q", "{searchTerms}")], keep))
        keep.assert_not_called()

    def test_build_optional_token_in_path(self):
        url = url_builder.build_template_url("http://x.org/{startPage?}/search", "GET", [("q", "{searchTerms}")])
        self.assertEqual(url, TemplateURLRef(url="http://x.org/{startPage?}/search?q={searchTerms}"))

    def test_rejected_without_host(self):
        keep = Mock(return_value=True)
        self.assertIsNone(url_builder.build_template_url("http:?q={searchTerms}", "GET", [], keep))
        self.assertIsNone(url_builder.build_template_url("http:", "GET", [("q", "{searchTerms}")], keep))
        keep.assert_not_called()

    def test_rejected_without_replacement(self):
        self.assertIsNone(url_builder.build_template_url("http://x.org/search", "GET", [("q", "x")]))
        self.assertIsNone(
            url_builder.build_template_url("http://x.org/?a={searchTerms}", "GET", [("q", "{searchTerms}")])
        )
