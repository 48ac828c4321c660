from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazylog.runtime import config
from lazylog.table.records import DEFAULT_FIELDS, FieldSpec


class ConfigBehaviorTests(unittest.TestCase):
    def _with_config(self, payload: object):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        if isinstance(payload, str):
            config_path.write_text(payload, encoding="utf-8")
        else:
            config_path.write_text(json.dumps(payload), encoding="utf-8")
        patcher = mock.patch("lazylog.runtime.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_config_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazylog.runtime.config.CONFIG_PATH", Path(tmp) / "absent.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_fields(), DEFAULT_FIELDS)
                self.assertIsNone(config.load_theme_name())
                self.assertEqual(config.load_log_level(), "INFO")
                self.assertIsNone(config.load_log_file())

    def test_malformed_config_is_ignored(self) -> None:
        self._with_config("{not json")
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_fields(), DEFAULT_FIELDS)

    def test_non_object_config_is_ignored(self) -> None:
        self._with_config([1, 2, 3])
        self.assertEqual(config.load_config(), {})

    def test_fields_accept_titles_and_objects_and_drop_duplicates(self) -> None:
        self._with_config(
            {
                "fields": [
                    "service",
                    {"title": "level", "keys": ["severity", "lvl"]},
                    "level",
                    {"title": ""},
                    42,
                    {"title": "status", "keys": "http.status"},
                ]
            }
        )

        self.assertEqual(
            config.load_fields(),
            (
                FieldSpec("service"),
                FieldSpec("level", ("severity", "lvl")),
                FieldSpec("status"),
            ),
        )

    def test_empty_field_list_uses_defaults(self) -> None:
        self._with_config({"fields": []})
        self.assertEqual(config.load_fields(), DEFAULT_FIELDS)

    def test_theme_and_logging_settings(self) -> None:
        self._with_config({"theme": " ocean ", "log_level": "debug", "log_file": "~/lazylog.log"})

        self.assertEqual(config.load_theme_name(), "ocean")
        self.assertEqual(config.load_log_level(), "DEBUG")
        self.assertEqual(config.load_log_file(), Path("~/lazylog.log").expanduser())

    def test_unknown_log_level_uses_default(self) -> None:
        self._with_config({"log_level": "loud"})
        self.assertEqual(config.load_log_level(), config.DEFAULT_LOG_LEVEL)

    def test_cli_titles_reuse_default_field_keys(self) -> None:
        fields = config.fields_from_titles(["level", "service", "level"])
        self.assertEqual(fields, (DEFAULT_FIELDS[1], FieldSpec("service")))


if __name__ == "__main__":
    unittest.main()
