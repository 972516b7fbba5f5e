from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from ctxcn.errors import SpecError
from ctxcn.loader import _get_url_extension, _is_url, load_tool_list


class TestLoadToolList:
    def test_accepts_mapping(self, weather_tool_list: dict[str, object]) -> None:
        loaded = load_tool_list(weather_tool_list)
        assert [tool["name"] for tool in loaded["tools"]] == ["get-forecast", "ping"]
        assert loaded.get("serverInfo", {}).get("name") == "weather"

    def test_wraps_bare_tool_list(self) -> None:
        loaded = load_tool_list([{"name": "ping"}])
        assert loaded == {"tools": [{"name": "ping"}]}

    @pytest.mark.parametrize(
        ("document", "message"),
        [
            pytest.param({}, "Missing or invalid 'tools'", id="missing-tools"),
            pytest.param({"tools": {}}, "Missing or invalid 'tools'", id="tools-not-list"),
            pytest.param({"tools": ["ping"]}, "Tool #0 must be an object", id="tool-not-object"),
            pytest.param({"tools": [{"description": "x"}]}, "Tool #0 is missing a 'name'", id="missing-name"),
            pytest.param({"tools": [{"name": ""}]}, "Tool #0 is missing a 'name'", id="empty-name"),
            pytest.param({"tools": [], "serverInfo": "weather"}, "'serverInfo' must be an object", id="bad-server"),
        ],
    )
    def test_invalid_documents_raise(self, document: dict[str, object], message: str) -> None:
        with pytest.raises(SpecError, match=message):
            load_tool_list(document)

    def test_loads_json_file(self, tmp_path: Path, weather_tool_list: dict[str, object]) -> None:
        path = tmp_path / "tools.json"
        path.write_text(json.dumps(weather_tool_list), encoding="utf-8")
        loaded = load_tool_list(path)
        assert len(loaded["tools"]) == 2

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        yaml = pytest.importorskip("yaml")
        path = tmp_path / "tools.yaml"
        path.write_text(yaml.safe_dump({"tools": [{"name": "ping"}]}), encoding="utf-8")
        loaded = load_tool_list(str(path))
        assert loaded["tools"][0]["name"] == "ping"

    def test_falls_back_to_yaml_for_unknown_extension(self, tmp_path: Path) -> None:
        pytest.importorskip("yaml")
        path = tmp_path / "tools.txt"
        path.write_text("tools:\n  - name: ping\n", encoding="utf-8")
        loaded = load_tool_list(path)
        assert loaded["tools"][0]["name"] == "ping"

    def test_invalid_text_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "tools.json"
        path.write_text("tools: [unclosed", encoding="utf-8")
        with pytest.raises(SpecError, match="neither valid JSON nor YAML"):
            load_tool_list(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_tool_list(tmp_path / "missing.json")

    def test_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SpecError, match="Failed to read tool list"):
            load_tool_list(tmp_path)

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "tools.json"
        path.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(SpecError, match="Failed to read tool list"):
            load_tool_list(path)


class TestLoadFromURL:
    def test_is_url_detects_http(self) -> None:
        assert _is_url("http://example.com/tools.json") is True
        assert _is_url("https://example.com/tools.yaml") is True
        assert _is_url("./local/tools.json") is False
        assert _is_url("tools.json") is False

    def test_get_url_extension(self) -> None:
        assert _get_url_extension("https://example.com/tools.YAML?x=1") == ".yaml"
        assert _get_url_extension("https://example.com/tools") == ""

    def test_loads_json_from_url(self) -> None:
        with patch("ctxcn.loader._fetch_url", return_value=json.dumps({"tools": [{"name": "ping"}]})) as fetch:
            loaded = load_tool_list("https://example.com/tools.json")
        fetch.assert_called_once_with("https://example.com/tools.json")
        assert loaded["tools"][0]["name"] == "ping"

    def test_loads_yaml_from_url(self) -> None:
        pytest.importorskip("yaml")
        with patch("ctxcn.loader._fetch_url", return_value="tools:\n  - name: ping\n"):
            loaded = load_tool_list("https://example.com/tools.yml")
        assert loaded["tools"][0]["name"] == "ping"

    def test_fetch_failure_propagates(self) -> None:
        with patch("ctxcn.loader._fetch_url", side_effect=SpecError("Failed to fetch URL: https://example.com")):
            with pytest.raises(SpecError, match="Failed to fetch URL"):
                load_tool_list("https://example.com/tools.json")
