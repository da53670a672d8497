# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=cyclic-import
"""Strict parser of OpenSearch description documents, see :py:obj:`parse`."""
from __future__ import annotations

import typing as t
import sys
import os
import logging

import msgspec

LOG_FORMAT_DEBUG: str = '%(levelname)-7s %(name)-30.30s: %(message)s'
LOG_FORMAT_PROD: str = '%(asctime)-15s %(levelname)s:%(name)s: %(message)s'
LOG_LEVEL_PROD = logging.WARNING

logger = logging.getLogger('osdd')

settings: dict[str, t.Any] = {}
"""Sections of :py:obj:`osdd.settings_defaults.Settings` by name, read them
with :py:obj:`get_setting`."""

_unset = object()


def init_settings():
    """(Re)load the settings and configure the ``osdd`` logger.  Called on
    import, call it again after ``OSDD_SETTINGS_PATH`` has been changed."""

    # pylint: disable=import-outside-toplevel
    from osdd import settings_loader
    from osdd.settings_defaults import build_settings

    cfg, msg = settings_loader.load_settings()
    new_settings = build_settings(cfg)

    settings.clear()
    settings.update(msgspec.structs.asdict(new_settings))

    if new_settings.general.debug:
        _logging_config_debug()
    else:
        logging.basicConfig(level=LOG_LEVEL_PROD, format=LOG_FORMAT_PROD)
        logger.setLevel(LOG_LEVEL_PROD)
    logger.debug(msg)


def get_setting(name: str, default: t.Any = _unset) -> t.Any:
    """Value of the dotted ``name``, e.g. ``parser.huge_tree``.  If there is no
    such setting and ``default`` is unset, a :py:obj:`KeyError` is raised."""
    value: t.Any = settings
    for key in name.split('.'):
        if isinstance(value, dict):
            value = value.get(key, _unset)
        elif isinstance(value, msgspec.Struct):
            value = getattr(value, key, _unset)
        else:
            value = _unset
        if value is _unset:
            if default is _unset:
                raise KeyError(name)
            return default
    return value


def _logging_config_debug():
    level = getattr(logging, os.environ.get('OSDD_DEBUG_LOG_LEVEL', 'DEBUG').upper(), logging.DEBUG)
    try:
        import coloredlogs  # pylint: disable=import-outside-toplevel
    except ImportError:
        coloredlogs = None

    if coloredlogs and os.getenv('TERM') not in ('dumb', 'unknown') and sys.stderr.isatty():
        coloredlogs.install(level=level, logger=logger, fmt=LOG_FORMAT_DEBUG)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT_DEBUG)
    logger.setLevel(level)


init_settings()

# pylint: disable=wrong-import-position
from osdd.exceptions import (
    OsddParseException,
    MalformedXmlException,
    InvalidRootException,
    MissingRequiredFieldException,
)
from osdd.template_url import SearchEngine, TemplateURLRef
from osdd.parameter_filter import ParameterFilter, keep_all
from osdd.parser import parse

__all__ = [
    "parse",
    "SearchEngine",
    "TemplateURLRef",
    "ParameterFilter",
    "keep_all",
    "OsddParseException",
    "MalformedXmlException",
    "InvalidRootException",
    "MissingRequiredFieldException",
]
