"""
Command-line interface for coolclis.

Usage: coolclis [--config PATH] [--log-level LEVEL] COMMAND [options]
"""

import argparse
import asyncio
import inspect
import sys
from pathlib import Path
from typing import List, Optional

from coolclis import __version__
from coolclis.checker import check_links, format_link_status, summarize
from coolclis.config import add_tool, find_repo, format_tool_table, list_tools
from coolclis.errors import CoolclisError
from coolclis.installer import default_install_dir, install_tool
from coolclis.logging import configure_logging, get_logger

logger = get_logger("cli")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coolclis",
        description="A tool to download and install CLI tools from GitHub releases",
        epilog='Use "coolclis COMMAND --help" for command-specific help',
    )
    parser.add_argument(
        "--version", action="version", version=f"coolclis {__version__}"
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Path to the tool catalog (default: ./cli-tools.json, then the user config dir)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for diagnostics on stderr (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    install = subparsers.add_parser("install", help="Install a tool from GitHub")
    install.add_argument(
        "tool", help="GitHub repository in the format owner/repo or a predefined tool name"
    )
    install.add_argument(
        "-v", "--version", dest="tag", help="Specific version to install (defaults to latest)"
    )
    install.add_argument(
        "-d",
        "--dir",
        type=Path,
        help=f"Installation directory (defaults to {default_install_dir()})",
    )
    install.add_argument(
        "-n",
        "--name",
        help="Executable name (defaults to the repository name, e.g. 'rg' installs as ripgrep)",
    )

    subparsers.add_parser("list", help="List all available predefined tools")

    add = subparsers.add_parser("add", help="Add a new tool to the configuration")
    add.add_argument("repo", help="GitHub repository in the format owner/repo")
    add.add_argument(
        "-n", "--name", help="Tool name (defaults to the repository name)"
    )
    add.add_argument("-d", "--description", help="Description of the tool")

    subparsers.add_parser(
        "check", help="Check all tool links in the config file (validate GitHub repo exists)"
    )
    subparsers.add_parser("serve", help="Run the MCP server on stdio")

    return parser


class DownloadProgress:
    """Render download progress on stderr."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr
        self.last_percent = -1

    def __call__(self, downloaded: int, total: int) -> None:
        if not total:
            return
        percent = min(100, downloaded * 100 // total)
        if percent == self.last_percent:
            return
        self.last_percent = percent
        self.stream.write(f"\rDownloading... {percent:3d}% ({downloaded}/{total} bytes)")
        if percent == 100:
            self.stream.write("\n")
        self.stream.flush()


async def cmd_install(args: argparse.Namespace) -> int:
    repo = find_repo(args.tool, args.config)
    result = await install_tool(
        repo,
        version=args.tag,
        install_dir=args.dir,
        tool_name=args.name,
        progress=DownloadProgress(),
        notify=print,
    )
    print(f"Successfully installed {result.tool} to {result.path}")
    print(f"Make sure {result.path.parent} is in your PATH")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    print("Available CLI tools:")
    print(format_tool_table(list_tools(args.config)))
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    entry = add_tool(
        args.repo, name=args.name, description=args.description, path=args.config
    )
    print(f"Added {entry.name} ({entry.repo})")
    return 0


async def cmd_check(args: argparse.Namespace) -> int:
    statuses = []
    async for status in check_links(list_tools(args.config)):
        print(format_link_status(status), flush=True)
        statuses.append(status)
    print(summarize(statuses))
    return 0 if all(s.ok for s in statuses) else 1


async def cmd_serve(args: argparse.Namespace) -> int:
    from coolclis.server import serve

    await serve(args.config, args.log_level)
    return 0


COMMANDS = {
    "install": cmd_install,
    "list": cmd_list,
    "add": cmd_add,
    "check": cmd_check,
    "serve": cmd_serve,
}


def run(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    handler = COMMANDS[args.command]
    try:
        if inspect.iscoroutinefunction(handler):
            return asyncio.run(handler(args))
        return handler(args)
    except CoolclisError as e:
        logger.debug({"event": "command_failed", "command": args.command, "details": e.details})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


def main() -> None:
    sys.exit(run())
