# SPDX-License-Identifier: AGPL-3.0-or-later
"""Loading of the settings from YAML files.  The defaults are in
:origin:`osdd/settings.yml`, a user settings file (see
:py:obj:`get_user_settings_file`) replaces them, or is merged into them if it
sets ``use_default_settings: true``.
"""

import typing as t
import os
from pathlib import Path

import yaml

from osdd.exceptions import OsddSettingsException

SETTINGS_YAML = "settings.yml"
DEFAULT_SETTINGS_FILE = Path(__file__).parent / SETTINGS_YAML
ETC_FOLDER = Path("/etc/osdd")


def load_yaml(file_name: str | Path) -> dict[str, t.Any]:
    """Load a YAML settings file, an empty file is an empty dict."""
    try:
        with open(file_name, 'r', encoding='utf-8') as settings_yaml:
            return yaml.safe_load(settings_yaml) or {}
    except (IOError, yaml.YAMLError) as e:
        raise OsddSettingsException(e, str(file_name)) from e


def get_user_settings_file() -> Path | None:
    """Returns the user settings file or ``None`` if there is none.

    1. ``OSDD_SETTINGS_PATH`` points to a file (e.g. ``/etc/myosdd/strict.yml``),
       this file is used.  This is what the test suite does.

    2. ``OSDD_SETTINGS_PATH`` points to a folder, ``settings.yml`` from this
       folder is used if it exists.

    3. Otherwise ``/etc/osdd/settings.yml`` is used if it exists.

    If ``OSDD_SETTINGS_PATH`` is set but does not exist, a
    :py:obj:`EnvironmentError` is raised.
    """
    settings_path = os.environ.get("OSDD_SETTINGS_PATH")
    if settings_path:
        path = Path(settings_path)
        if path.is_file():
            return path
        if not path.is_dir():
            raise EnvironmentError(1, f"{path} not exists!", settings_path)
        folder = path
    elif os.environ.get('OSDD_DISABLE_ETC_SETTINGS', '').lower() in ('1', 'true'):
        # only used by the test suite
        return None
    else:
        folder = ETC_FOLDER

    cfg_file = folder / SETTINGS_YAML
    return cfg_file if cfg_file.is_file() else None


def merge_settings(default: dict[str, t.Any], user: dict[str, t.Any]) -> dict[str, t.Any]:
    """Merge ``user`` into ``default`` (in place).  Sections are merged
    recursively, lists and scalar values of ``user`` replace the defaults."""
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(default.get(key), dict):
            merge_settings(default[key], value)
        else:
            default[key] = value
    return default


def is_use_default_settings(user_settings: dict[str, t.Any]) -> bool:
    value = user_settings.get('use_default_settings')
    if value is None or value is False:
        return False
    if value is True:
        return True
    raise ValueError(f'Invalid value for use_default_settings: {value!r}')


def load_settings(load_user_settings: bool = True) -> tuple[dict[str, t.Any], str]:
    """Returns the settings loaded from the YAML files and a message telling
    where they were loaded from."""
    cfg = load_yaml(DEFAULT_SETTINGS_FILE)
    cfg_file = get_user_settings_file() if load_user_settings else None
    if cfg_file is None:
        return cfg, f"load the default settings from {DEFAULT_SETTINGS_FILE}"

    user_cfg = load_yaml(cfg_file)
    use_default_settings = is_use_default_settings(user_cfg)
    user_cfg.pop('use_default_settings', None)
    if not use_default_settings:
        return user_cfg, f"load the user settings from {cfg_file}"
    return merge_settings(cfg, user_cfg), f"merge the default settings and the user settings from {cfg_file}"
