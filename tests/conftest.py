from __future__ import annotations

import pytest


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def weather_tool_list() -> dict[str, object]:
    return {
        "serverInfo": {"name": "weather", "version": "1.2.0"},
        "tools": [
            {
                "name": "get-forecast",
                "description": "Get the forecast for a city",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "city": {"type": "string", "description": "City name"},
                        "days": {"type": "integer"},
                    },
                    "required": ["city"],
                },
                "outputSchema": {
                    "type": "object",
                    "description": "Daily forecast entries",
                    "properties": {
                        "days": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "date": {"type": "string"},
                                    "temperature": {"type": "number"},
                                },
                                "required": ["date", "temperature"],
                            },
                        },
                    },
                    "required": ["days"],
                },
            },
            {
                "name": "ping",
                "inputSchema": {"type": "object"},
            },
        ],
    }
