"""MCP tool functions, called directly."""

import pytest

from template_navigator import mcp_server

from conftest import APP_TEMPLATE_LINES


@pytest.fixture(autouse=True)
def reset_server():
    yield
    if mcp_server._context.service is not None:
        mcp_server._context.service.dispose()
        mcp_server._context.service = None


def test_tools_require_project_path():
    result = mcp_server.refresh_index()

    assert result["success"] is False
    assert "set_project_path" in result["error"]
    assert mcp_server.get_index_status() == {"configured": False, "success": True}


def test_set_project_path_and_find_definition(angular_project):
    result = mcp_server.set_project_path(str(angular_project))

    assert result["success"] is True
    assert result["status"] == "ok"

    character = APP_TEMPLATE_LINES[2].index("currencyCode") + 1
    found = mcp_server.find_definition("src/app/app.component.html", 2, character)

    assert found["success"] is True
    assert found["location"]["file"].endswith("currency-code.pipe.ts")


def test_lookup_and_status(angular_project):
    mcp_server.set_project_path(str(angular_project))

    assert mcp_server.lookup_artifact("app-root")["artifact"]["kind"] == "component"
    assert mcp_server.lookup_artifact("nope")["artifact"] is None

    status = mcp_server.get_index_status()
    assert status["configured"] is True
    assert status["artifact_count"] == 5


def test_describe_symbol_and_notify(angular_project):
    mcp_server.set_project_path(str(angular_project))

    info = mcp_server.describe_symbol("src/app/app.component.html", 3, 1)["info"]
    assert info["location"]["line"] == 5

    changed = mcp_server.notify_file_change("src/app/app.component.ts", "bogus")
    assert changed["success"] is False


def test_invalid_project_path():
    result = mcp_server.set_project_path("/definitely/not/here")

    assert result["success"] is False
    assert "does not exist" in result["error"]
