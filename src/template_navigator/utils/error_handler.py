"""
Error handling helpers for tool entry points and per-file isolation.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional, cast

logger = logging.getLogger(__name__)


def handle_tool_errors(func: Callable) -> Callable:
    """
    Unified error handling for MCP tools - standardized response format.

    Successful dict responses gain a ``success`` flag; any exception is
    converted into an error response instead of propagating to the transport.
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)
            if isinstance(result, dict) and "success" not in result:
                result["success"] = True
            return cast(Dict[str, Any], result)
        except Exception as e:
            logger.exception(f"Tool {func.__name__} failed")
            return {"success": False, "error": str(e), "function": func.__name__}

    return wrapper


def read_text_or_none(read: Callable[[str], str], path: str) -> Optional[str]:
    """Read a file through ``read``; unreadable files yield None and a warning."""
    try:
        return read(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping unreadable file {path}: {e}")
        return None
