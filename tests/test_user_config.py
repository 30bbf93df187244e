"""
Unit tests for user configuration loading.
"""

import json

from dupegroup.config import DEFAULT_THRESHOLD, DEFAULT_HASH_SIZE, DEFAULT_REPORT_FILENAME
from dupegroup.user_config import UserConfig, get_user_config


class TestUserConfig:
    """Test UserConfig priority rules."""

    def test_singleton(self):
        assert UserConfig() is get_user_config()

    def test_defaults(self, isolated_config):
        assert isolated_config.default_threshold == DEFAULT_THRESHOLD
        assert isolated_config.default_hash_size == DEFAULT_HASH_SIZE
        assert isolated_config.hash_algorithm == "phash"
        assert isolated_config.grouping_mode == "anchor"
        assert isolated_config.default_workers is None
        assert isolated_config.report_filename == DEFAULT_REPORT_FILENAME

    def test_config_file(self, isolated_config):
        isolated_config.config_dir.mkdir(parents=True)
        isolated_config.config_file_path.write_text(
            json.dumps({'default_threshold': 4, 'grouping_mode': 'transitive'})
        )
        isolated_config.reload()

        assert isolated_config.default_threshold == 4
        assert isolated_config.grouping_mode == "transitive"
        assert isolated_config.default_hash_size == DEFAULT_HASH_SIZE

    def test_env_overrides_file(self, isolated_config, monkeypatch):
        isolated_config.config_dir.mkdir(parents=True)
        isolated_config.config_file_path.write_text(json.dumps({'default_threshold': 4}))
        isolated_config.reload()
        monkeypatch.setenv('DUPEGROUP_THRESHOLD', '7')
        monkeypatch.setenv('DUPEGROUP_REPORT', 'dupes.json')

        assert isolated_config.default_threshold == 7
        assert isolated_config.report_filename == "dupes.json"

    def test_invalid_config_file_ignored(self, isolated_config):
        isolated_config.config_dir.mkdir(parents=True)
        isolated_config.config_file_path.write_text("{broken")
        isolated_config.reload()

        assert isolated_config.default_threshold == DEFAULT_THRESHOLD

    def test_create_example_config(self, isolated_config):
        assert isolated_config.create_example_config()
        data = json.loads(isolated_config.config_file_path.read_text())
        assert data['default_threshold'] == DEFAULT_THRESHOLD
        assert data['report_filename'] == DEFAULT_REPORT_FILENAME
        assert isolated_config.as_dict()['default_hash_size'] == DEFAULT_HASH_SIZE
