# SPDX-License-Identifier: AGPL-3.0-or-later
"""Exception types raised by the OSDD modules."""

import typing as t


class OsddException(Exception):
    """Base OSDD exception."""


@t.final
class OsddSettingsException(OsddException):
    """Error while loading the settings"""

    def __init__(self, message: str | Exception, filename: str | None):
        super().__init__(message)
        self.message = message
        self.filename = filename


class OsddParseException(OsddException):
    """The document can't be turned into a search engine.

    The parser is the only place these exceptions are raised, the element
    handlers never abort a parse.
    """

    default_message: str = "can't parse OpenSearch description"

    def __init__(self, message: str | None = None):
        self.message: str = message or self.default_message
        super().__init__(self.message)


class MalformedXmlException(OsddParseException):
    """The input is not well-formed XML."""

    default_message = "malformed XML"


class InvalidRootException(OsddParseException):
    """The root element is missing or is not an OpenSearch description."""

    default_message = "root element is not an OpenSearch description"

    def __init__(self, root_name: str | None = None, message: str | None = None):
        if message is None and root_name:
            message = f"unexpected root element <{root_name}>"
        super().__init__(message)
        self.root_name: str | None = root_name


class MissingRequiredFieldException(OsddParseException):
    """No valid search ``Url`` (GET, http/https, exactly one ``{searchTerms}``)
    was found in the document."""

    default_message = "no valid search URL"
