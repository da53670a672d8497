# SPDX-License-Identifier: AGPL-3.0-or-later
"""Parser of `OpenSearch description documents`_ (OSDD).

.. code:: python

   import osdd

   engine = osdd.parse(data)
   engine.search_url.replace_search_terms("hello world")

A document is accepted if it is well-formed XML, its root is an
``<OpenSearchDescription>`` (or a Mozilla ``<SearchPlugin>``) and it contains
a usable search ``<Url>``: method GET, an ``http`` or ``https`` URL with a host
and exactly one ``{searchTerms}`` once the ``<Param>`` elements are appended.
If several ``<Url>`` elements qualify for the same role, the first one wins.

Namespaces are ignored, a ``<ShortName>`` in the OpenSearch namespace, in any
other namespace or without namespace is the same element.  Unknown elements and
attributes are skipped.

.. _OpenSearch description documents:
   https://github.com/dewitt/opensearch/blob/master/opensearch-1-1-draft-6.md#opensearch-description-document
"""

from __future__ import annotations

__all__ = ["parse", "ROOT_ELEMENTS"]

from osdd import logger
from osdd import xml_util
from osdd.exceptions import MalformedXmlException, InvalidRootException, MissingRequiredFieldException
from osdd.handlers import SearchEngineBuilder, handle_element
from osdd.parameter_filter import ParameterFilter
from osdd.template_url import SearchEngine

logger = logger.getChild('parser')

ROOT_ELEMENTS = ("OpenSearchDescription", "SearchPlugin")
"""Local names of the accepted root elements."""


def parse(data: bytes | bytearray | memoryview, parameter_filter: ParameterFilter | None = None) -> SearchEngine:
    """Parse the OpenSearch description in ``data``.

    :param data: the complete document, the encoding is taken from the XML
      declaration (default UTF-8)
    :param parameter_filter: decides which ``<Param>`` elements are appended
      to the URLs, by default all are kept
    :raises MalformedXmlException: ``data`` is not well-formed XML
    :raises InvalidRootException: the root is not an OpenSearch description
    :raises MissingRequiredFieldException: there is no usable search URL
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like object, not {type(data).__name__}")

    try:
        root = xml_util.fromstring(bytes(data))
    except xml_util.PARSE_ERRORS as exc:
        raise MalformedXmlException(str(exc) or None) from exc

    root_name = xml_util.local_name(root)
    if root_name not in ROOT_ELEMENTS:
        raise InvalidRootException(root_name)

    builder = SearchEngineBuilder(parameter_filter=parameter_filter)
    for element in xml_util.iter_elements(root):
        handle_element(builder, element)

    if builder.search_url is None:
        raise MissingRequiredFieldException()

    engine = builder.build()
    logger.debug("parsed search engine %r: %s", engine.short_name, engine.search_url.url)  # type: ignore
    return engine
