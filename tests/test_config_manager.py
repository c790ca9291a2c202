"""Tests for config_manager module."""

import json
import os

from pagepicker.utils import config_manager
from pagepicker.utils.config_manager import DEFAULT_CONFIG, ConfigManager, get_config_manager


class TestConfigManager:
    def _make_manager(self, tmp_dir, initial=None):
        path = os.path.join(tmp_dir, "config.json")
        if initial is not None:
            with open(path, "w") as f:
                json.dump(initial, f)
        return ConfigManager(config_path=path)

    def test_creates_file_with_defaults(self, tmp_path):
        path = tmp_path / "new" / "settings.json"
        ConfigManager(config_path=str(path))
        with open(path) as f:
            assert json.load(f) == DEFAULT_CONFIG

    def test_get_default_value(self, tmp_path):
        cm = self._make_manager(tmp_path)
        assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_defaults(self, tmp_path):
        cm = self._make_manager(tmp_path)
        assert cm.get("server.max_upload_bytes") == 10 * 1024 * 1024
        assert cm.get("server.url") == ""
        assert cm.get("extraction.strict_pages") is False
        assert cm.get("picker.thumbnail_width") > 0

    def test_set_and_get(self, tmp_path):
        cm = self._make_manager(tmp_path)
        cm.set("server.port", 8080, save_immediately=False)
        assert cm.get("server.port") == 8080

    def test_save_and_reload(self, tmp_path):
        cm = self._make_manager(tmp_path)
        cm.set("picker.last_output_folder", "/tmp/out")
        cm2 = ConfigManager(config_path=cm.config_path)
        assert cm2.get("picker.last_output_folder") == "/tmp/out"

    def test_nested_key_path(self, tmp_path):
        cm = self._make_manager(tmp_path)
        cm.set("a.b.c", 42, save_immediately=False)
        assert cm.get("a.b.c") == 42

    def test_old_file_upgraded_with_missing_keys(self, tmp_path):
        cm = self._make_manager(tmp_path, initial={"server": {"port": 9000}})
        assert cm.get("server.port") == 9000
        assert cm.get("server.host") == DEFAULT_CONFIG["server"]["host"]
        assert cm.get("extraction.strict_pages") is False
        assert cm.get("version") == DEFAULT_CONFIG["version"]

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        cm = ConfigManager(config_path=str(path))
        assert cm.get("server.max_upload_bytes") == DEFAULT_CONFIG["server"]["max_upload_bytes"]

    def test_save_returns_true(self, tmp_path):
        cm = self._make_manager(tmp_path)
        assert cm.save() is True

    def test_global_manager_is_shared(self, isolated_config):
        assert get_config_manager() is isolated_config
        assert config_manager._config_manager is isolated_config
