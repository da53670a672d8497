# SPDX-License-Identifier: AGPL-3.0-or-later
"""Assemble the :py:obj:`TemplateURLRef` of an ``<Url>`` element.

The ``template`` attribute is the base of the URL, the parameters from the
``<Param>`` / ``<Parameter>`` children which pass the
:py:obj:`ParameterFilter <osdd.parameter_filter.ParameterFilter>` are appended
to its query string:

.. code:: xml

   <Url type="text/html" method="GET" template="http://search.ebay.com/search/search.dll">
     <Param name="query" value="{searchTerms}"/>
     <Param name="ht" value="1"/>
   </Url>

is assembled to ``http://search.ebay.com/search/search.dll?query={searchTerms}&ht=1``.

An ``<Url>`` is discarded (:py:obj:`build_template_url` returns ``None``) when
its method is POST, it is not an ``http`` / ``https`` URL with a host or the
assembled template doesn't support the replacement of the search terms.
"""

from __future__ import annotations

__all__ = ["UrlRole", "url_role", "parse_method", "build_template_url"]

import typing as t
import urllib.parse

from osdd import logger, get_setting
from osdd.parameter_filter import ParameterFilter, keep_all
from osdd.template_url import TemplateURLRef, HTTPMethod, is_template_token, mask_template_tokens

if t.TYPE_CHECKING:
    from collections.abc import Iterable

logger = logger.getChild('url_builder')

UrlRole = t.Literal["search", "suggestion"]

ALLOWED_SCHEMES = ("http", "https")


def url_role(url_type: str) -> UrlRole:
    """Role of an ``<Url>`` element by its ``type`` attribute.  Suggestion types
    are configured in :ref:`parser.suggestion_types <settings parser>`, every
    other type (or a missing one) is a search URL."""
    suggestion_types = [s.lower() for s in get_setting("parser.suggestion_types")]
    if url_type.strip().lower() in suggestion_types:
        return "suggestion"
    return "search"


def parse_method(method: str) -> HTTPMethod:
    """``POST`` if ``method`` is *post* in any case, otherwise ``GET``."""
    if method.strip().lower() == "post":
        return "POST"
    return "GET"


def is_http_url(template: str) -> bool:
    """``True`` if ``template`` is an absolute ``http`` or ``https`` URL with a
    host, tokens like ``{lang?}`` in the host are accepted."""
    try:
        parsed = urllib.parse.urlsplit(mask_template_tokens(template.strip()))
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.netloc)


def format_parameter(name: str, value: str) -> str:
    """``name=value``, the value is percent-encoded unless it is a template
    token like ``{searchTerms}``."""
    if not is_template_token(value):
        value = urllib.parse.quote(value, safe="")
    return f"{name}={value}"


def append_parameters(base: str, parameters: list[str]) -> str:
    """Append ``parameters`` to the query of ``base``.  The delimiter is ``?`` if
    ``base`` has no query yet and ``&`` otherwise, a fragment stays at the
    end."""
    if not parameters:
        return base

    masked = mask_template_tokens(base)
    fragment = ""
    if "#" in masked:
        end = masked.index("#")
        base, fragment, masked = base[:end], base[end:], masked[:end]

    if "?" not in masked:
        base += "?"
    elif not masked.endswith(("?", "&")):
        base += "&"
    return base + "&".join(parameters) + fragment


def build_template_url(
    template: str,
    method: HTTPMethod,
    parameters: Iterable[tuple[str, str]],
    parameter_filter: ParameterFilter | None = None,
) -> TemplateURLRef | None:
    """Returns the template of an ``<Url>`` element or ``None`` if the element
    has to be discarded.

    ``parameters`` are the ``(name, value)`` pairs of the ``<Param>`` children
    in document order, they are passed to ``parameter_filter`` only if the
    method and the scheme of the ``<Url>`` are acceptable.
    """
    if method == "POST":
        logger.debug("discard POST URL %s", template)
        return None

    template = template.strip()
    if not template:
        logger.debug("discard URL without template")
        return None

    if not is_http_url(template):
        logger.debug("discard URL with unsupported scheme or without host: %s", template)
        return None

    if parameter_filter is None:
        parameter_filter = keep_all

    kept = []
    for name, value in parameters:
        if parameter_filter(name, value):
            kept.append(format_parameter(name, value))
        else:
            logger.debug("filtered parameter %s=%s", name, value)

    url = TemplateURLRef(url=append_parameters(template, kept), method=method)
    if not url.supports_replacement:
        logger.debug("discard URL without (or with ambiguous) {searchTerms}: %s", url.url)
        return None
    return url
