import pytest

from coolclis.binaries.platforms import describe_platform
from coolclis.binaries.resolver import resolve, search_patterns
from coolclis.errors import NoMatchingAsset
from tests.helpers import make_assets


def test_search_pattern_order(linux_arm64):
    """Test patterns enumerate OS outer, arch inner, OS-only last per OS"""
    assert search_patterns(linux_arm64) == [
        "unknown-linux-arm64",
        "unknown-linux_arm64",
        "unknown-linuxarm64",
        "arm64-unknown-linux",
        "unknown-linux-aarch64",
        "unknown-linux_aarch64",
        "unknown-linuxaarch64",
        "aarch64-unknown-linux",
        "unknown-linux",
        "linux-arm64",
        "linux_arm64",
        "linuxarm64",
        "arm64-linux",
        "linux-aarch64",
        "linux_aarch64",
        "linuxaarch64",
        "aarch64-linux",
        "linux",
    ]


def test_search_pattern_count(darwin_arm64, linux_x86_64):
    """Test four forms per OS/arch pair plus one OS-only pattern per OS"""
    assert len(search_patterns(darwin_arm64)) == 5 * (2 * 4 + 1)
    assert len(search_patterns(linux_x86_64)) == 2 * (3 * 4 + 1)


def test_first_match_ordering(linux_x86_64):
    """Test the earlier-generated pattern wins over a later one"""
    assets = make_assets("tool-linux-x86_64.tar.gz", "tool-linux-amd64.tar.gz")
    assert resolve(assets, "tool", linux_x86_64).name == "tool-linux-x86_64.tar.gz"

    reversed_assets = list(reversed(assets))
    assert resolve(reversed_assets, "tool", linux_x86_64).name == "tool-linux-x86_64.tar.gz"


def test_composite_triple_preferred(linux_x86_64):
    """Test the unknown-linux spelling is tried before plain linux"""
    assets = make_assets(
        "tool-linux-x86_64.tar.gz", "tool-x86_64-unknown-linux-musl.tar.gz"
    )
    assert resolve(assets, "tool", linux_x86_64).name == "tool-x86_64-unknown-linux-musl.tar.gz"


def test_tool_name_precedence(linux_x86_64):
    """Test an asset naming the tool wins even when listed later"""
    assets = make_assets("helper-linux-x86_64.tar.gz", "Tool-linux-x86_64.tar.gz")
    assert resolve(assets, "tool", linux_x86_64).name == "Tool-linux-x86_64.tar.gz"


def test_platform_only_fallback(linux_x86_64):
    """Test assets without the tool name are used when nothing else matches"""
    assets = make_assets("release-linux-amd64.tgz", "release-darwin-amd64.tgz")
    assert resolve(assets, "tool", linux_x86_64).name == "release-linux-amd64.tgz"


def test_no_match_names_platform(linux_arm64):
    """Test failure carries the canonical platform"""
    assets = make_assets("tool-windows-x86_64.exe")
    with pytest.raises(NoMatchingAsset, match=r"\(linux-arm64\)") as exc_info:
        resolve(assets, "tool", linux_arm64)
    assert exc_info.value.os_name == "linux"
    assert exc_info.value.arch == "arm64"
    assert exc_info.value.details == {"os": "linux", "arch": "arm64"}


def test_empty_asset_list(linux_x86_64):
    """Test an empty release fails cleanly"""
    with pytest.raises(NoMatchingAsset):
        resolve([], "tool", linux_x86_64)


def test_macos_spellings(darwin_arm64):
    """Test vendor spellings of macOS are matched"""
    assets = make_assets("tool-linux-arm64.tar.gz", "tool_macos_arm64.zip")
    assert resolve(assets, "tool", darwin_arm64).name == "tool_macos_arm64.zip"

    assets = make_assets("tool-aarch64-apple-darwin.tar.gz", "tool-darwin-arm64.tar.gz")
    assert resolve(assets, "tool", darwin_arm64).name == "tool-aarch64-apple-darwin.tar.gz"


def test_os_only_pattern(darwin_arm64):
    """Test an OS-only asset is acceptable"""
    assets = make_assets("tool-linux.tar.gz", "tool-mac.tar.gz")
    assert resolve(assets, "tool", darwin_arm64).name == "tool-mac.tar.gz"


def test_windows_extension_order(windows_x86_64):
    """Test .exe is preferred over archives for the same pattern"""
    assets = make_assets(
        "tool-windows-x86_64.zip", "tool-windows-x86_64.exe", "tool-windows-x86_64.exe.sha256"
    )
    assert resolve(assets, "tool", windows_x86_64).name == "tool-windows-x86_64.exe"


def test_windows_rejects_unknown_extension(windows_x86_64):
    """Test Windows assets must carry a known extension"""
    assets = make_assets("tool-windows-x86_64.msi")
    with pytest.raises(NoMatchingAsset, match="windows-x86_64"):
        resolve(assets, "tool", windows_x86_64)


def test_case_insensitive_matching(linux_x86_64):
    """Test asset and tool names are compared lowercased"""
    assets = make_assets("MyTool-Linux-X86_64.TAR.GZ")
    assert resolve(assets, "MYTOOL", linux_x86_64).name == "MyTool-Linux-X86_64.TAR.GZ"


def test_resolution_is_deterministic(linux_x86_64):
    """Test repeated resolution gives the same answer"""
    assets = make_assets(
        "tool-linux-amd64.tar.gz", "tool-linux-x64.zip", "tool-unknown-linux-x86_64"
    )
    results = {resolve(assets, "tool", linux_x86_64) for _ in range(5)}
    assert len(results) == 1


def test_platform_is_injected():
    """Test resolution depends only on the descriptor passed in"""
    assets = make_assets("tool-freebsd-x86_64.tar.gz")
    with pytest.raises(NoMatchingAsset):
        resolve(assets, "tool", describe_platform("Linux", "x86_64"))
