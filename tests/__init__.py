# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring,disable=missing-class-docstring,invalid-name

import pathlib
import os
import unittest


os.environ.pop('OSDD_SETTINGS_PATH', None)
os.environ['OSDD_DISABLE_ETC_SETTINGS'] = '1'


class OsddTestCase(unittest.TestCase):
    """Base test case for the unit tests."""

    SETTINGS_FOLDER = pathlib.Path(__file__).parent / "unit" / "settings"
    TEST_SETTINGS = "test_settings.yml"

    OSDD_FOLDER = pathlib.Path(__file__).parent / "unit" / "osdd"

    def setUp(self):
        self.init_test_settings()

    def init_test_settings(self):
        """Sets ``OSDD_SETTINGS_PATH`` environment variable an initialize
        global ``settings`` variable and the ``logger`` from a test config in
        :origin:`tests/unit/settings/`.
        """

        os.environ['OSDD_SETTINGS_PATH'] = str(self.SETTINGS_FOLDER / self.TEST_SETTINGS)

        # pylint: disable=import-outside-toplevel
        import osdd

        osdd.init_settings()

    def read_osdd(self, file_name: str) -> bytes:
        """Content of the OpenSearch description ``file_name`` from
        :origin:`tests/unit/osdd/`."""
        return (self.OSDD_FOLDER / file_name).read_bytes()
