"""MCP server exposing the installer as tools."""
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import stdio
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions

from coolclis import __version__
from coolclis.checker import collect_link_statuses
from coolclis.config import add_tool, find_repo, list_tools
from coolclis.errors import CoolclisError, log_error
from coolclis.installer import install_tool
from coolclis.logging import configure_logging, get_logger

logger = get_logger("server")

tools = [
    types.Tool(
        name="coolclis_install",
        description="Install a CLI tool from its latest (or a tagged) GitHub release",
        inputSchema={
            "type": "object",
            "properties": {
                "tool": {
                    "type": "string",
                    "description": "owner/repo or a name from the tool catalog",
                },
                "version": {"type": "string", "description": "Release tag"},
                "dir": {"type": "string", "description": "Installation directory"},
                "name": {"type": "string", "description": "Executable name override"},
            },
            "required": ["tool"],
        },
    ),
    types.Tool(
        name="coolclis_list",
        description="List the tools in the catalog",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="coolclis_add",
        description="Add a repository to the tool catalog",
        inputSchema={
            "type": "object",
            "properties": {
                "repo": {"type": "string", "description": "owner/repo"},
                "name": {"type": "string", "description": "Tool name"},
                "description": {"type": "string", "description": "Tool description"},
            },
            "required": ["repo"],
        },
    ),
    types.Tool(
        name="coolclis_check",
        description="Check that every catalog repository link resolves",
        inputSchema={"type": "object", "properties": {}},
    ),
]


def _text(payload: Dict[str, Any]) -> List[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(payload))]


async def handle_tool(
    name: str, arguments: Dict[str, Any], config_path: Optional[Path] = None
) -> List[types.TextContent]:
    """Run one tool call and wrap the outcome as a JSON text result."""
    try:
        if name == "coolclis_install":
            repo = find_repo(arguments["tool"], config_path)
            result = await install_tool(
                repo,
                version=arguments.get("version"),
                install_dir=arguments.get("dir"),
                tool_name=arguments.get("name"),
            )
            return _text(
                {
                    "success": True,
                    "data": {
                        "tool": result.tool,
                        "repo": result.repo,
                        "tag": result.tag,
                        "asset": result.asset.name,
                        "path": str(result.path),
                    },
                }
            )

        elif name == "coolclis_list":
            entries = list_tools(config_path)
            return _text(
                {
                    "success": True,
                    "data": [
                        {"name": t.name, "repo": t.repo, "description": t.description}
                        for t in entries
                    ],
                }
            )

        elif name == "coolclis_add":
            entry = add_tool(
                arguments["repo"],
                name=arguments.get("name"),
                description=arguments.get("description"),
                path=config_path,
            )
            return _text(
                {"success": True, "data": {"name": entry.name, "repo": entry.repo}}
            )

        elif name == "coolclis_check":
            statuses = await collect_link_statuses(list_tools(config_path))
            return _text(
                {
                    "success": all(s.ok for s in statuses),
                    "data": [
                        {
                            "name": s.name,
                            "repo": s.repo,
                            "ok": s.ok,
                            "status": s.status,
                            "error": s.error,
                        }
                        for s in statuses
                    ],
                }
            )

        return _text({"success": False, "error": f"Unknown tool: {name}"})

    except CoolclisError as e:
        log_error(e, {"tool": name, "arguments": arguments}, logger)
        return _text(
            {"success": False, "error": str(e), "code": e.code, "details": e.details}
        )
    except KeyError as e:
        return _text({"success": False, "error": f"Missing argument: {e.args[0]}"})


async def init_server(config_path: Optional[Path] = None) -> Server:
    logger.info(f"Registered tools: {', '.join(t.name for t in tools)}")

    server = Server("coolclis")

    @server.list_tools()
    async def list_tools_handler() -> List[types.Tool]:
        logger.debug("Tools requested")
        return tools

    @server.call_tool()
    async def call_tool(
        name: str, arguments: Dict[str, Any]
    ) -> List[types.TextContent | types.ImageContent | types.EmbeddedResource]:
        logger.debug(f"Tool call received: {name} with arguments {arguments}")
        return list(await handle_tool(name, arguments or {}, config_path))

    return server


async def serve(config_path: Optional[Path] = None, log_level: str = "INFO") -> None:
    configure_logging(log_level)
    logger.info("Starting coolclis MCP server")
    server = await init_server(config_path)
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name="coolclis",
            server_version=__version__,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
