# SPDX-License-Identifier: AGPL-3.0-or-later
"""Filter for the ``<Param>`` elements of an ``<Url>``.

Firefox search plugins and descriptions using the `Parameter extension`_ list
the query parameters of a URL as child elements.  Some of them only make sense
for the browser they were written for (``sourceid=Mozilla-search``), the caller
of :py:obj:`osdd.parser.parse` decides which of them are kept.  A filter is
any callable with the signature of :py:obj:`ParameterFilter.__call__`:

.. code:: python

   def no_mozilla(name: str, value: str) -> bool:
       return "Mozilla" not in value

   engine = osdd.parse(data, no_mozilla)

The parser calls the filter synchronously, once per parameter and in document
order.  Parameters of ``<Url>`` elements the parser has already discarded (POST
method, unsupported scheme, role already taken) are never passed to the
filter.  If the same filter is used by parsers in several threads, the filter
has to be thread safe.

.. _Parameter extension:
   https://github.com/dewitt/opensearch/blob/master/mediawiki/Specifications/OpenSearch/Extensions/Parameter/1.0/Draft%202.wiki
"""

from __future__ import annotations

__all__ = ["ParameterFilter", "keep_all"]

from typing import Protocol, runtime_checkable


@runtime_checkable
class ParameterFilter(Protocol):  # pylint: disable=too-few-public-methods
    """Decides whether a parameter is appended to the URL template."""

    def __call__(self, name: str, value: str) -> bool:
        """Return ``True`` to keep the parameter ``name=value``.

        Parameters
        ----------
        name : str
            Value of the ``name`` attribute.
        value : str
            Value of the ``value`` attribute, not yet percent-encoded.
        """
        raise NotImplementedError


def keep_all(name: str, value: str) -> bool:  # pylint: disable=unused-argument
    """The filter used when the caller passes none: every parameter is kept."""
    return True
