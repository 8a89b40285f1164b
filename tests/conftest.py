import pytest

from coolclis.binaries.platforms import describe_platform
from coolclis.types import PlatformDescriptor


@pytest.fixture
def linux_x86_64() -> PlatformDescriptor:
    return describe_platform("Linux", "x86_64")


@pytest.fixture
def linux_arm64() -> PlatformDescriptor:
    return describe_platform("Linux", "aarch64")


@pytest.fixture
def darwin_arm64() -> PlatformDescriptor:
    return describe_platform("Darwin", "arm64")


@pytest.fixture
def windows_x86_64() -> PlatformDescriptor:
    return describe_platform("Windows", "AMD64")


@pytest.fixture
def catalog_file(tmp_path, monkeypatch):
    """Isolated catalog file with two tools; cwd and user config dir point at tmp_path"""
    from coolclis.config import save_tools
    from coolclis.types import ToolEntry

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COOLCLIS_CONFIG", raising=False)
    monkeypatch.setattr(
        "coolclis.config.user_config_path", lambda: tmp_path / "user" / "cli-tools.json"
    )

    path = tmp_path / "cli-tools.json"
    save_tools(
        path,
        [
            ToolEntry("rg", "BurntSushi/ripgrep", "Fast grep"),
            ToolEntry("fd", "sharkdp/fd", "Fast find"),
        ],
    )
    return path
