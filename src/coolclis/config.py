"""Tool catalog: the persisted tool-name to repository mapping.

The catalog is a JSON document ``{"tools": [{"name", "repo", "description"}]}``.
Lookup order: an explicit path (argument or ``COOLCLIS_CONFIG``), then
``./cli-tools.json``, then the user config directory, then the catalog
bundled with the package.
"""

import json
import os
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

import appdirs

from coolclis.errors import ConfigError, DuplicateToolError, UnknownToolError
from coolclis.logging import get_logger
from coolclis.types import ToolEntry
from coolclis.utils.github import tool_name_from_repo, validate_repo, validate_tool_name

logger = get_logger(__name__)

CONFIG_FILENAME = "cli-tools.json"
CONFIG_ENV = "COOLCLIS_CONFIG"
APP_NAME = "coolclis"


def bundled_config_path() -> Path:
    return Path(str(resources.files("coolclis").joinpath("data").joinpath(CONFIG_FILENAME)))


def user_config_path() -> Path:
    return Path(appdirs.user_config_dir(APP_NAME)) / CONFIG_FILENAME


def _explicit(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path).expanduser()
    env = os.environ.get(CONFIG_ENV)
    return Path(env).expanduser() if env else None


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Catalog file to read from."""
    explicit = _explicit(path)
    if explicit is not None:
        return explicit

    for candidate in (Path.cwd() / CONFIG_FILENAME, user_config_path()):
        if candidate.is_file():
            return candidate
    return bundled_config_path()


def writable_config_path(path: Optional[Path] = None) -> Path:
    """Catalog file that ``add`` writes to; never the bundled copy."""
    explicit = _explicit(path)
    if explicit is not None:
        return explicit

    local = Path.cwd() / CONFIG_FILENAME
    if local.is_file():
        return local
    return user_config_path()


def load_tools(path: Path) -> List[ToolEntry]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(str(path), "file not found") from e
    except json.JSONDecodeError as e:
        raise ConfigError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("tools"), list):
        raise ConfigError(str(path), "expected an object with a 'tools' list")

    tools = []
    for item in raw["tools"]:
        try:
            tools.append(
                ToolEntry(
                    name=item["name"],
                    repo=item["repo"],
                    description=item.get("description", ""),
                )
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigError(str(path), f"malformed tool entry {item!r}") from e
    return tools


def save_tools(path: Path, tools: List[ToolEntry]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = {
        "tools": [
            {"name": t.name, "repo": t.repo, "description": t.description}
            for t in tools
        ]
    }
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    logger.debug({"event": "config_saved", "path": str(path), "tools": len(tools)})


def list_tools(path: Optional[Path] = None) -> List[ToolEntry]:
    config_path = resolve_config_path(path)
    logger.debug({"event": "config_loaded", "path": str(config_path)})
    return load_tools(config_path)


def load_cli_tools(path: Optional[Path] = None) -> Dict[str, str]:
    """Map of tool name to ``owner/repo``."""
    return {t.name: t.repo for t in list_tools(path)}


def find_repo(tool: str, path: Optional[Path] = None) -> str:
    """Resolve ``tool`` to a repository; ``owner/repo`` strings pass through."""
    if "/" in tool:
        return validate_repo(tool)
    tools = load_cli_tools(path)
    if tool not in tools:
        raise UnknownToolError(tool)
    return tools[tool]


def add_tool(
    repo: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    path: Optional[Path] = None,
) -> ToolEntry:
    """Append a tool to the catalog, seeding a new file from the current one."""
    validate_repo(repo)
    entry = ToolEntry(
        name=validate_tool_name(name or tool_name_from_repo(repo)),
        repo=repo,
        description=description or "No description provided",
    )

    target = writable_config_path(path)
    source = target if target.is_file() else resolve_config_path(path)
    tools = load_tools(source) if source.is_file() else []

    if any(t.name == entry.name for t in tools):
        raise DuplicateToolError(entry.name)

    tools.append(entry)
    save_tools(target, tools)
    logger.info({"event": "tool_added", "name": entry.name, "repo": repo, "path": str(target)})
    return entry


def format_tool_table(tools: List[ToolEntry]) -> str:
    lines = [
        f"{'NAME':<15} {'REPOSITORY':<30} DESCRIPTION",
        f"{'----':<15} {'----------':<30} -----------",
    ]
    lines.extend(f"{t.name:<15} {t.repo:<30} {t.description}" for t in tools)
    return "\n".join(lines)
