from __future__ import annotations

import json
from pathlib import Path

import pytest

from ctxcn.config import CONFIG_FILENAME, ProjectConfig, config_exists, load_config, save_config
from ctxcn.errors import ConfigError


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert config_exists(tmp_path) is False
        assert load_config(tmp_path) == ProjectConfig(
            source="ctxcn_clients",
            relays=["ws://localhost:10547"],
            private_key=None,
            added_clients=[],
        )

    def test_reads_values(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            json.dumps(
                {
                    "source": "clients",
                    "relays": ["wss://relay.example"],
                    "private_key": "secret",
                    "added_clients": ["abc"],
                    "unknown": 1,
                }
            ),
            encoding="utf-8",
        )
        assert config_exists(tmp_path) is True
        assert load_config(tmp_path) == ProjectConfig(
            source="clients",
            relays=["wss://relay.example"],
            private_key="secret",
            added_clients=["abc"],
        )

    def test_invalid_values_fall_back_to_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            json.dumps({"source": "", "relays": "wss://relay.example", "added_clients": None}),
            encoding="utf-8",
        )
        assert load_config(tmp_path) == ProjectConfig()

    @pytest.mark.parametrize(
        "contents",
        [
            pytest.param("{not json", id="invalid-json"),
            pytest.param("[]", id="not-object"),
        ],
    )
    def test_malformed_file_raises(self, tmp_path: Path, contents: str) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(contents, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestSaveConfig:
    def test_writes_indented_json(self, tmp_path: Path) -> None:
        config = ProjectConfig(source="clients", added_clients=["abc"])
        path = save_config(tmp_path, config)
        assert path == tmp_path / CONFIG_FILENAME
        text = path.read_text(encoding="utf-8")
        assert text.startswith('{\n  "source": "clients"')
        assert "private_key" not in text
        assert load_config(tmp_path) == config
