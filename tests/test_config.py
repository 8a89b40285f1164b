import json

import pytest

from coolclis.config import (
    add_tool,
    bundled_config_path,
    find_repo,
    format_tool_table,
    list_tools,
    load_cli_tools,
    load_tools,
    resolve_config_path,
    writable_config_path,
)
from coolclis.errors import (
    ConfigError,
    DuplicateToolError,
    InvalidRepoError,
    InvalidToolNameError,
    UnknownToolError,
)
from coolclis.types import ToolEntry


def test_bundled_catalog_loads():
    """Test the packaged catalog is valid"""
    tools = load_tools(bundled_config_path())
    assert tools
    assert all("/" in t.repo for t in tools)


def test_local_file_preferred(catalog_file):
    """Test ./cli-tools.json is read first"""
    assert resolve_config_path() == catalog_file
    assert load_cli_tools() == {"rg": "BurntSushi/ripgrep", "fd": "sharkdp/fd"}


def test_explicit_path_and_env(catalog_file, tmp_path, monkeypatch):
    """Test explicit paths and COOLCLIS_CONFIG override discovery"""
    other = tmp_path / "other.json"
    assert resolve_config_path(other) == other

    monkeypatch.setenv("COOLCLIS_CONFIG", str(other))
    assert resolve_config_path() == other
    assert writable_config_path() == other


def test_falls_back_to_bundled(tmp_path, monkeypatch):
    """Test the bundled catalog is used when nothing else exists"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COOLCLIS_CONFIG", raising=False)
    monkeypatch.setattr(
        "coolclis.config.user_config_path", lambda: tmp_path / "user" / "cli-tools.json"
    )
    assert resolve_config_path() == bundled_config_path()
    assert writable_config_path() == tmp_path / "user" / "cli-tools.json"


def test_find_repo(catalog_file):
    """Test names resolve through the catalog and owner/repo passes through"""
    assert find_repo("rg") == "BurntSushi/ripgrep"
    assert find_repo("owner/anything") == "owner/anything"


def test_find_repo_unknown(catalog_file):
    with pytest.raises(UnknownToolError, match="Use the 'list' command"):
        find_repo("nope")


def test_find_repo_bad_format(catalog_file):
    with pytest.raises(InvalidRepoError):
        find_repo("a/b/c")


def test_add_tool_round_trip(catalog_file):
    """Test added tools persist with defaults filled in"""
    entry = add_tool("junegunn/fzf")
    assert entry == ToolEntry("fzf", "junegunn/fzf", "No description provided")

    raw = json.loads(catalog_file.read_text())
    assert raw["tools"][-1] == {
        "name": "fzf",
        "repo": "junegunn/fzf",
        "description": "No description provided",
    }
    assert [t.name for t in list_tools()] == ["rg", "fd", "fzf"]


def test_add_tool_custom_name(catalog_file):
    entry = add_tool("cli/cli", name="gh", description="GitHub CLI")
    assert load_cli_tools()["gh"] == "cli/cli"
    assert entry.description == "GitHub CLI"


def test_add_tool_duplicate(catalog_file):
    """Test duplicate names are rejected and the file is unchanged"""
    before = catalog_file.read_text()
    with pytest.raises(DuplicateToolError):
        add_tool("someone/rg")
    assert catalog_file.read_text() == before


def test_add_tool_invalid_repo(catalog_file):
    with pytest.raises(InvalidRepoError):
        add_tool("not-a-repo")


def test_add_tool_invalid_name(catalog_file):
    """Test catalog names must be plain file names"""
    before = catalog_file.read_text()
    with pytest.raises(InvalidToolNameError):
        add_tool("owner/tool", name="../tool")
    assert catalog_file.read_text() == before


def test_add_tool_seeds_user_config_from_bundled(tmp_path, monkeypatch):
    """Test the first add copies the bundled catalog into the user config"""
    user_file = tmp_path / "user" / "cli-tools.json"
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COOLCLIS_CONFIG", raising=False)
    monkeypatch.setattr("coolclis.config.user_config_path", lambda: user_file)

    add_tool("owner/newtool")

    bundled = load_tools(bundled_config_path())
    saved = load_tools(user_file)
    assert saved[: len(bundled)] == bundled
    assert saved[-1].name == "newtool"


def test_add_tool_to_new_explicit_file(tmp_path):
    path = tmp_path / "nested" / "tools.json"
    add_tool("owner/tool", path=path)
    assert load_tools(path) == [ToolEntry("tool", "owner/tool", "No description provided")]


@pytest.mark.parametrize(
    "content,reason",
    [
        ("{not json", "invalid JSON"),
        ("[]", "'tools' list"),
        ('{"tools": [{"name": "x"}]}', "malformed"),
    ],
)
def test_load_tools_errors(tmp_path, content, reason):
    """Test malformed catalogs raise ConfigError"""
    path = tmp_path / "cli-tools.json"
    path.write_text(content)
    with pytest.raises(ConfigError, match=reason):
        load_tools(path)


def test_load_tools_missing(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_tools(tmp_path / "missing.json")


def test_format_tool_table():
    """Test the listing layout"""
    table = format_tool_table([ToolEntry("rg", "BurntSushi/ripgrep", "Fast grep")])
    lines = table.splitlines()
    assert lines[0].startswith("NAME")
    assert "REPOSITORY" in lines[0]
    assert lines[2].split() == ["rg", "BurntSushi/ripgrep", "Fast", "grep"]
