# SPDX-License-Identifier: AGPL-3.0-or-later
"""Handlers of the elements in an OpenSearch description.

Each handler reads one child element of the root and stores what it finds in
the :py:obj:`SearchEngineBuilder` of the running parse.  A handler never
raises: content that can't be used (a relative favicon URL, a POST URL, ..)
leaves the field of the builder untouched.
"""

from __future__ import annotations

__all__ = ["ElementKind", "SearchEngineBuilder", "handle_element"]

import re
import enum
import typing as t
import dataclasses
import urllib.parse

from osdd import logger
from osdd.parameter_filter import ParameterFilter
from osdd.template_url import SearchEngine, TemplateURLRef
from osdd.url_builder import UrlRole, url_role, parse_method, build_template_url
from osdd.xml_util import local_name, get_attribute, element_text, iter_elements

if t.TYPE_CHECKING:
    from collections.abc import Iterator
    from lxml import etree

logger = logger.getChild('handlers')

ENCODING_RE = re.compile(r"[A-Za-z][A-Za-z0-9._-]*")
"""Syntax of a character set name in ``<InputEncoding>``."""

FAVICON_SIZE = "16"


class ElementKind(enum.Enum):
    """The elements of an OpenSearch description this package understands."""

    SHORT_NAME = "ShortName"
    LONG_NAME = "LongName"
    URL = "Url"
    IMAGE = "Image"
    INPUT_ENCODING = "InputEncoding"
    PARAMETER = "Parameter"
    UNKNOWN = ""

    @classmethod
    def of(cls, element: etree._Element) -> ElementKind:  # pylint: disable=protected-access
        """Kind of ``element`` by its local name (namespace is ignored)."""
        name = local_name(element)
        if name == "Param":
            # Mozilla's search plugins
            return cls.PARAMETER
        if not name:
            return cls.UNKNOWN
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


@dataclasses.dataclass
class SearchEngineBuilder:
    """Collects the fields of a :py:obj:`SearchEngine` while the document is
    walked.  Only used for one call of :py:obj:`osdd.parser.parse`."""

    parameter_filter: ParameterFilter | None = None
    short_name: str = ""
    long_name: str = ""
    favicon_url: str | None = None
    favicon_is_16x16: bool = False
    search_url: TemplateURLRef | None = None
    suggestions_url: TemplateURLRef | None = None
    input_encodings: list[str] = dataclasses.field(default_factory=list)

    def get_url(self, role: UrlRole) -> TemplateURLRef | None:
        if role == "suggestion":
            return self.suggestions_url
        return self.search_url

    def set_url(self, role: UrlRole, url: TemplateURLRef):
        if role == "suggestion":
            self.suggestions_url = url
        else:
            self.search_url = url

    def build(self) -> SearchEngine:
        return SearchEngine(
            short_name=self.short_name,
            long_name=self.long_name,
            favicon_url=self.favicon_url,
            search_url=self.search_url,
            suggestions_url=self.suggestions_url,
            input_encodings=tuple(self.input_encodings),
        )


def handle_element(builder: SearchEngineBuilder, element: etree._Element):  # pylint: disable=protected-access
    """Dispatch a child of the root element to its handler, unknown elements
    are skipped."""
    match ElementKind.of(element):
        case ElementKind.SHORT_NAME:
            builder.short_name = element_text(element)
        case ElementKind.LONG_NAME:
            builder.long_name = element_text(element)
        case ElementKind.URL:
            handle_url(builder, element)
        case ElementKind.IMAGE:
            handle_image(builder, element)
        case ElementKind.INPUT_ENCODING:
            handle_input_encoding(builder, element)
        case _:
            logger.debug("skip element <%s>", local_name(element))


def handle_url(builder: SearchEngineBuilder, element: etree._Element):  # pylint: disable=protected-access
    role = url_role(get_attribute(element, "type"))
    if builder.get_url(role) is not None:
        logger.debug("%s URL already set, skip %s", role, get_attribute(element, "template"))
        return

    url = build_template_url(
        get_attribute(element, "template"),
        parse_method(get_attribute(element, "method")),
        iter_parameters(element),
        builder.parameter_filter,
    )
    if url is not None:
        builder.set_url(role, url)


def iter_parameters(element: etree._Element) -> Iterator[tuple[str, str]]:  # pylint: disable=protected-access
    """``(name, value)`` of the ``<Param>`` / ``<Parameter>`` children of an
    ``<Url>`` element, parameters without a name are skipped."""
    for child in iter_elements(element):
        if ElementKind.of(child) is not ElementKind.PARAMETER:
            continue
        name = get_attribute(child, "name")
        if not name:
            logger.debug("skip parameter without name")
            continue
        yield name, get_attribute(child, "value")


def handle_image(builder: SearchEngineBuilder, element: etree._Element):  # pylint: disable=protected-access
    """The first usable ``<Image>`` is the favicon, unless a later one is
    declared as 16x16 and the first is not."""
    url = element_text(element)
    if not is_favicon_url(url):
        logger.debug("skip image %r", url)
        return

    is_16x16 = get_attribute(element, "width") == FAVICON_SIZE and get_attribute(element, "height") == FAVICON_SIZE
    if builder.favicon_url is None or (is_16x16 and not builder.favicon_is_16x16):
        builder.favicon_url = url
        builder.favicon_is_16x16 = is_16x16


def is_favicon_url(url: str) -> bool:
    """Only absolute ``http`` and ``https`` URLs are accepted."""
    try:
        parsed = urllib.parse.urlsplit(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in ("http", "https") and bool(parsed.netloc)


def handle_input_encoding(builder: SearchEngineBuilder, element: etree._Element):  # pylint: disable=protected-access
    encoding = element_text(element)
    if not ENCODING_RE.fullmatch(encoding):
        logger.debug("skip input encoding %r", encoding)
        return
    builder.input_encodings.append(encoding)
