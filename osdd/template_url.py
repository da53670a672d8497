# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=too-few-public-methods
"""Types of a parsed OpenSearch description.

- :py:obj:`SearchEngine` the result of :py:obj:`osdd.parser.parse`
- :py:obj:`TemplateURLRef` a search or suggestion URL of the engine

Both are frozen :py:obj:`msgspec.Struct` types, once :py:obj:`osdd.parser.parse`
has returned, nothing modifies them.  To serialize a search engine use
:py:obj:`msgspec.json.encode`.

----

.. autoclass:: SearchEngine
   :members:

.. autoclass:: TemplateURLRef
   :members:
"""

from __future__ import annotations

__all__ = ["SearchEngine", "TemplateURLRef", "HTTPMethod", "SEARCH_TERMS", "parse_template_tokens"]

import re
import codecs
import typing as t
import urllib.parse

import msgspec

HTTPMethod = t.Literal["GET", "POST"]

SEARCH_TERMS = "{searchTerms}"
"""The placeholder of the user's query."""

TOKEN_RE = re.compile(r"\{([^{}]+)\}")

DEFAULT_PARAMETERS: dict[str, str] = {
    "count": "20",
    "startIndex": "1",
    "startPage": "1",
    "outputEncoding": "UTF-8",
}
"""Defaults of the OpenSearch 1.1 template parameters, ``{language}`` and
``{inputEncoding}`` are taken from the arguments of
:py:obj:`TemplateURLRef.replace_search_terms`."""


def parse_template_tokens(template: str) -> list[str] | None:
    """Returns the names of the ``{..}`` tokens in ``template`` in the order they
    occur.  ``None`` is returned if the braces are not well-formed: a ``{``
    without ``}``, a ``}`` without ``{``, nested braces or an empty ``{}``.

    .. code:: python

       >>> parse_template_tokens("http://x.org/?q={searchTerms}&p={startPage?}")
       ['searchTerms', 'startPage?']
       >>> parse_template_tokens("http://x.org/?q={searchTerms") is None
       True
    """
    tokens: list[str] = []
    pos = 0
    while True:
        start = template.find("{", pos)
        if template.find("}", pos, len(template) if start == -1 else start) != -1:
            # closing brace outside of a token
            return None
        if start == -1:
            return tokens
        end = template.find("}", start + 1)
        if end == -1:
            return None
        name = template[start + 1 : end]
        if not name or "{" in name:
            return None
        tokens.append(name)
        pos = end + 1


def is_template_token(value: str) -> bool:
    """``True`` if ``value`` is exactly one well-formed template token, e.g.
    ``{searchTerms}`` or ``{startPage?}``."""
    return TOKEN_RE.fullmatch(value) is not None


def mask_template_tokens(template: str) -> str:
    """``template`` with each token overwritten by ``_`` of the same length.
    The ``?`` of an optional token like ``{startPage?}`` is not a query
    delimiter, positions in the masked string are those of ``template``."""
    return TOKEN_RE.sub(lambda m: "_" * len(m.group(0)), template)


class TemplateURLRef(msgspec.Struct, kw_only=True, frozen=True):
    """A URL template of a search engine (the ``template`` of an ``<Url>``
    element, with the ``<Param>`` elements appended)."""

    url: str
    """The assembled template, e.g.
    ``http://en.wikipedia.org/w/index.php?title=Special:Search&search={searchTerms}``."""

    method: HTTPMethod = "GET"
    """HTTP method from the ``method`` attribute.  The parser never returns a
    ``POST`` template, the field is kept so that callers don't have to
    assume."""

    @property
    def supports_replacement(self) -> bool:
        """``True`` if the template contains exactly one ``{searchTerms}`` and
        all its tokens are well-formed (see :py:obj:`parse_template_tokens`)."""
        tokens = parse_template_tokens(self.url)
        if tokens is None:
            return False
        return tokens.count(SEARCH_TERMS[1:-1]) == 1

    def replace_search_terms(self, terms: str, input_encoding: str = "UTF-8", language: str = "*") -> str:
        """Build the URL of a search for ``terms``.

        The terms are percent-encoded in ``input_encoding`` (UTF-8 if the
        encoding is unknown or can't represent the terms), a space is encoded as
        ``+`` in the query component and as ``%20`` elsewhere.  Unknown optional
        tokens (``{foo?}``) are dropped, unknown required tokens are left as
        they are.

        :raises ValueError: the template does not support replacement
        """
        if not self.supports_replacement:
            raise ValueError(f"template does not support replacement: {self.url}")

        encoding = _normalize_encoding(input_encoding)
        masked = mask_template_tokens(self.url)
        query_start = masked.find("?")
        fragment_start = masked.find("#", max(query_start, 0))

        def in_query(pos: int) -> bool:
            return query_start != -1 and pos > query_start and (fragment_start == -1 or pos < fragment_start)

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            optional = name.endswith("?")
            name = name.rstrip("?")
            if name == "searchTerms":
                return _quote_terms(terms, encoding, in_query(match.start()))
            if name == "inputEncoding":
                return encoding
            if name == "language":
                return language
            if name in DEFAULT_PARAMETERS:
                return DEFAULT_PARAMETERS[name]
            if optional:
                return ""
            return match.group(0)

        return TOKEN_RE.sub(replace, self.url)


def _normalize_encoding(encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except LookupError:
        return "UTF-8"
    return encoding


def _quote_terms(terms: str, encoding: str, query: bool) -> str:
    quote = urllib.parse.quote_plus if query else urllib.parse.quote
    try:
        return quote(terms, safe="", encoding=encoding, errors="strict")
    except UnicodeEncodeError:
        return quote(terms, safe="", encoding="utf-8")


class SearchEngine(msgspec.Struct, kw_only=True, frozen=True):
    """A search engine described by an OpenSearch description document."""

    short_name: str = ""
    """``<ShortName>``, the name shown to the user."""

    long_name: str = ""
    """``<LongName>``"""

    favicon_url: str | None = None
    """Absolute ``http`` or ``https`` URL from an ``<Image>`` element."""

    search_url: TemplateURLRef | None = None
    """The search URL, a successful parse guarantees a GET template that
    :py:obj:`supports replacement <TemplateURLRef.supports_replacement>`."""

    suggestions_url: TemplateURLRef | None = None
    """Optional URL for query suggestions (``type="application/x-suggestions+json"``)."""

    input_encodings: tuple[str, ...] = ()
    """``<InputEncoding>`` values in document order, duplicates included."""

    @property
    def input_encoding(self) -> str:
        """The encoding of the search terms, the first of
        :py:obj:`input_encodings` or ``UTF-8``."""
        if self.input_encodings:
            return self.input_encodings[0]
        return "UTF-8"
