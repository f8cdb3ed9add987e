"""MCP server exposing template navigation tools."""
import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .config import get_config
from .service import NavigatorService
from .utils import handle_tool_errors

logger = logging.getLogger(__name__)


@dataclass
class NavigatorContext:
    service: Optional[NavigatorService] = None


_context = NavigatorContext()


def _start_service(path: str) -> NavigatorService:
    if _context.service is not None:
        _context.service.dispose()
    _context.service = NavigatorService(root=path, watch=True)
    return _context.service


def _require_service() -> NavigatorService:
    if _context.service is None:
        raise RuntimeError("Project path not set. Call set_project_path first.")
    return _context.service


@asynccontextmanager
async def navigator_lifespan(_server: FastMCP) -> AsyncIterator[NavigatorContext]:
    root = os.environ.get("TEMPLATE_NAV_ROOT")
    if root:
        _start_service(root).initialize()
    try:
        yield _context
    finally:
        if _context.service is not None:
            _context.service.dispose()
            _context.service = None


mcp = FastMCP("TemplateNavigator", lifespan=navigator_lifespan)


@mcp.tool()
@handle_tool_errors
def set_project_path(path: str) -> Dict[str, Any]:
    """Set the project root and build the initial index."""
    service = _start_service(path)
    return {"project_path": service.workspace.normalize("."), **service.initialize()}


@mcp.tool()
@handle_tool_errors
def refresh_index() -> Dict[str, Any]:
    """Rebuild the component, directive and pipe index from scratch."""
    return _require_service().rebuild()


@mcp.tool()
@handle_tool_errors
def find_definition(file_path: str, line: int, character: int) -> Dict[str, Any]:
    """
    Find where the tag, pipe or style class at a template position is declared.

    Args:
        file_path: Template path, absolute or relative to the project root
        line: 0-based line
        character: 0-based column

    Returns:
        ``location`` with file/line/column, or null when nothing is declared
    """
    return {"location": _require_service().resolve_at_position(file_path, line, character)}


@mcp.tool()
@handle_tool_errors
def describe_symbol(file_path: str, line: int, character: int) -> Dict[str, Any]:
    """Describe the declaration referenced at a template position."""
    return {"info": _require_service().describe_at_position(file_path, line, character)}


@mcp.tool()
@handle_tool_errors
def lookup_artifact(name: str) -> Dict[str, Any]:
    """Look up a component/directive selector or pipe name."""
    return {"artifact": _require_service().lookup_artifact(name)}


@mcp.tool()
@handle_tool_errors
def notify_file_change(file_path: str, kind: str) -> Dict[str, Any]:
    """Report a created, changed or deleted source file."""
    return _require_service().apply_change(file_path, kind)


@mcp.tool()
@handle_tool_errors
def get_index_status() -> Dict[str, Any]:
    """Index state: building flag, counts and last rebuild outcome."""
    if _context.service is None:
        return {"configured": False}
    return {"configured": True, **_context.service.status()}


def main():
    logging.basicConfig(level=get_config().log_level, stream=sys.stderr)
    mcp.run()


if __name__ == '__main__':
    main()
