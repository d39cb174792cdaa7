"""Telegram Cloud MCP.

Exposes a small set of Telegram Bot API operations as Model Context Protocol
tools, so an AI assistant can send messages and voice notes to a Telegram chat
over JSON-RPC.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from pathlib import Path

# Read version from pyproject.toml when running from source (always current).
# Fall back to installed package metadata for pip installs without source tree.
_pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
try:
    with open(_pyproject, "rb") as _f:
        __version__: str = tomllib.load(_f)["project"]["version"]
except Exception:
    try:
        __version__ = _pkg_version("telegram-cloud-mcp")
    except PackageNotFoundError:
        __version__ = "0.0.0-dev"

__license__ = "MIT"
