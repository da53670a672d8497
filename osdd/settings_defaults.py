# SPDX-License-Identifier: AGPL-3.0-or-later
"""Structure of the settings.  The YAML settings are converted into a
:py:obj:`Settings` struct, msgspec checks the types at runtime and rejects
unknown options."""
from __future__ import annotations

import typing as t
import os

import msgspec

STR_TO_BOOL = {
    '0': False,
    'false': False,
    'off': False,
    '1': True,
    'true': True,
    'on': True,
}


class SettingsGeneral(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):  # pylint: disable=too-few-public-methods
    """Section ``general`` of the settings."""

    debug: bool = False
    """Debug logging, only for development.  Is overwritten by ``OSDD_DEBUG``."""


class SettingsParser(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):  # pylint: disable=too-few-public-methods
    """Options of the OpenSearch description parser.

    .. code:: yaml

       parser:
         suggestion_types:
           - application/x-suggestions+json
           - application/x-suggestions+xml
         huge_tree: false

    None of these options relaxes the rules of a valid search URL (GET method,
    ``http`` or ``https`` URL with a host, exactly one ``{searchTerms}``).
    """

    suggestion_types: list[str] = msgspec.field(
        default_factory=lambda: ["application/x-suggestions+json", "application/x-suggestions+xml"]
    )
    """Values of the ``type`` attribute of an ``<Url>`` element that mark the
    suggestion URL.  Compared case-insensitive, any other type is a search
    URL."""

    huge_tree: bool = False
    """Passed to lxml's parser, disables the libxml2 limits on tree depth and
    text size.  Leave it off for documents from untrusted sites."""


class Settings(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):  # pylint: disable=too-few-public-methods
    """All settings, a missing section gets its defaults."""

    general: SettingsGeneral = msgspec.field(default_factory=SettingsGeneral)
    parser: SettingsParser = msgspec.field(default_factory=SettingsParser)


def environ_bool(name: str, default: bool) -> bool:
    """Boolean value of the environment variable ``name`` (``1``, ``true``,
    ``on``, ..), ``default`` if it is unset."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return STR_TO_BOOL[value.strip().lower()]
    except KeyError:
        raise ValueError(f"{name}: {value!r} is not a boolean") from None


def build_settings(cfg: dict[str, t.Any]) -> Settings:
    """Convert the settings loaded from YAML into a :py:obj:`Settings` struct
    and apply the overrides from the environment.

    :raises ValueError: an option is unknown or has the wrong type
    """
    try:
        settings = msgspec.convert(cfg, type=Settings)
    except msgspec.ValidationError as e:
        # "Expected `bool`, got `str` - at `$.parser.huge_tree`" names the
        # option as "parser.huge_tree"
        raise ValueError(f"invalid settings: {str(e).replace('`$.', '`')}") from e

    debug = environ_bool("OSDD_DEBUG", settings.general.debug)
    return msgspec.structs.replace(settings, general=SettingsGeneral(debug=debug))
