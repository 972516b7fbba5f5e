from __future__ import annotations

from typing import cast

from ctxcn.ir import PeerContext, ServerIR, ToolIR, build_ir
from ctxcn.tools import ToolListDocument


class TestBuildIR:
    def test_builds_server_and_tools(self, weather_tool_list: dict[str, object]) -> None:
        ir = build_ir(cast(ToolListDocument, weather_tool_list))
        assert ir.server == ServerIR(name="weather", version="1.2.0")
        assert [tool.name for tool in ir.tools] == ["get-forecast", "ping"]
        assert ir.tools[0].description == "Get the forecast for a city"

    def test_missing_fields_are_none(self) -> None:
        ir = build_ir(cast(ToolListDocument, {"tools": [{"name": "ping"}]}))
        assert ir.server == ServerIR(name=None, version=None)
        assert ir.tools == [ToolIR(name="ping", description=None, title=None, input_schema=None, output_schema=None)]

    def test_keeps_raw_schemas(self) -> None:
        input_schema = {"type": "object", "properties": {"id": {"$ref": "#/$defs/Id"}}}
        ir = build_ir(cast(ToolListDocument, {"tools": [{"name": "get", "inputSchema": input_schema}]}))
        assert ir.tools[0].input_schema is input_schema

    def test_empty_strings_are_treated_as_missing(self) -> None:
        ir = build_ir(cast(ToolListDocument, {"tools": [{"name": "ping", "description": "", "title": ""}]}))
        assert ir.tools[0].description is None
        assert ir.tools[0].title is None


class TestPeerContext:
    def test_defaults(self) -> None:
        peer = PeerContext(peer_identity="pubkey")
        assert peer.credential is None
        assert peer.endpoints is None
