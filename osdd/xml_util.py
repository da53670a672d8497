# SPDX-License-Identifier: AGPL-3.0-or-later
"""XML parser for documents from third-party sites.

OpenSearch descriptions are downloaded from arbitrary sites, the parser is
configured to never resolve entities, never load a DTD and never touch the
network (XXE, billion laughs).  Broken documents are rejected, there is no
``recover`` mode.

Element and attribute names are compared by their local name: many OpenSearch
descriptions in the wild omit the namespace declaration, others (Mozilla's
search plugins) mix the OpenSearch namespace with their own.
"""

from __future__ import annotations

__all__ = ["fromstring", "local_name", "get_attribute", "element_text", "iter_elements"]

import typing as t

from lxml import etree

from osdd import get_setting

if t.TYPE_CHECKING:
    from collections.abc import Iterator

PARSE_ERRORS = (etree.LxmlError, ValueError)
"""Errors raised by :py:obj:`fromstring` for input which is not well-formed
XML (``ValueError`` is raised by lxml e.g. for unsupported encodings)."""


def new_parser() -> etree.XMLParser:
    """Returns a new hardened parser.  A parser object is not thread safe, each
    parse gets its own parser."""
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        dtd_validation=False,
        recover=False,
        remove_comments=True,
        remove_pis=True,
        huge_tree=get_setting("parser.huge_tree", False),
    )


def fromstring(data: bytes) -> etree._Element:  # pylint: disable=protected-access
    """Drop in replacement for :py:obj:`lxml.etree.fromstring` using a hardened
    parser.  The encoding is taken from the XML declaration (default UTF-8).

    Raises one of :py:obj:`PARSE_ERRORS` if ``data`` is not well-formed XML.
    """
    return etree.fromstring(data, parser=new_parser())  # nosec: B320


def local_name(element: etree._Element) -> str:  # pylint: disable=protected-access
    """Tag name of ``element`` without namespace, ``""`` for nodes which are
    not elements (entity references and such)."""
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def get_attribute(element: etree._Element, name: str, default: str = "") -> str:  # pylint: disable=protected-access
    """Value of attribute ``name`` from ``element``.  An attribute without
    namespace is preferred, otherwise the first namespaced attribute with the
    local name ``name`` is used."""
    value = element.get(name)
    if value is not None:
        return value
    for key, value in element.attrib.items():
        if key.startswith("{") and key.rsplit("}", 1)[1] == name:
            return value
    return default


def element_text(element: etree._Element) -> str:  # pylint: disable=protected-access
    """Stripped text content of ``element`` including the text of child
    elements and the text after them, ``""`` for an empty element."""
    return "".join(element.itertext()).strip()


def iter_elements(element: etree._Element) -> Iterator[etree._Element]:  # pylint: disable=protected-access
    """Iterate over the child elements of ``element`` in document order."""
    yield from element.iterchildren(etree.Element)
