from __future__ import annotations

import pytest

from ctxcn.naming import ToolInfo, module_name, parameter_name, safe_identifier, to_pascal_case, tool_info


class TestToPascalCase:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            pytest.param("add-user", "AddUser", id="kebab"),
            pytest.param("GET_user-info", "GetUserInfo", id="mixed-separators"),
            pytest.param("get_HTTP_status", "GetHttpStatus", id="segments-lower-cased"),
            pytest.param("addUser", "AddUser", id="camel"),
            pytest.param("AddUser", "AddUser", id="pascal"),
            pytest.param("weather", "Weather", id="single-word"),
            pytest.param("api/v1/users", "ApiV1Users", id="slashes"),
            pytest.param("--user--id--", "UserId", id="separator-runs"),
            pytest.param("test server", "TestServer", id="spaces"),
            pytest.param("", "", id="empty"),
            pytest.param(None, "", id="none"),
        ],
    )
    def test_to_pascal_case(self, raw: str | None, expected: str) -> None:
        assert to_pascal_case(raw) == expected

    def test_is_deterministic(self) -> None:
        assert to_pascal_case("list-items") == to_pascal_case("list-items")


class TestToolInfo:
    def test_derives_type_names(self) -> None:
        assert tool_info("add-user") == ToolInfo(
            original_name="add-user",
            pascal_name="AddUser",
            input_type_name="AddUserInput",
            output_type_name="AddUserOutput",
        )

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            pytest.param("123abc", "Tool123abc", id="leading-digit"),
            pytest.param("---", "Tool", id="only-separators"),
            pytest.param("get.user", "Get_user", id="invalid-character"),
        ],
    )
    def test_pascal_name_is_identifier(self, name: str, expected: str) -> None:
        info = tool_info(name)
        assert info.pascal_name == expected
        assert info.original_name == name


class TestIdentifiers:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            pytest.param("value", "value", id="valid"),
            pytest.param("from", "from_", id="keyword"),
            pytest.param("user-id", "user_id", id="hyphen"),
            pytest.param("1st", "arg1st", id="leading-digit"),
            pytest.param("self", "self_", id="self"),
            pytest.param("arguments", "arguments_", id="arguments"),
            pytest.param("cast", "cast_", id="cast"),
            pytest.param("!!", "arg", id="no-valid-characters"),
        ],
    )
    def test_parameter_name(self, name: str, expected: str) -> None:
        assert parameter_name(name) == expected

    def test_safe_identifier_keeps_valid_names(self) -> None:
        assert safe_identifier("Weather", fallback="Server") == "Weather"


class TestModuleName:
    @pytest.mark.parametrize(
        ("class_name", "expected"),
        [
            pytest.param("TestServerClient", "test_server_client", id="pascal"),
            pytest.param("HTTPServerClient", "http_server_client", id="acronym"),
            pytest.param("Api2Client", "api2_client", id="digit"),
        ],
    )
    def test_module_name(self, class_name: str, expected: str) -> None:
        assert module_name(class_name) == expected
