"""Platform detection and filename synonyms."""

import platform
from typing import Optional

from coolclis.binaries.constants import (
    ARCH_SYNONYMS,
    MACHINE_ALIASES,
    OS_SYNONYMS,
    SYSTEM_ALIASES,
)
from coolclis.types import OS, Arch, PlatformDescriptor


def normalize_os(system: str) -> OS:
    s = system.strip().lower()
    if s.startswith("cygwin") or s.startswith("msys") or s.startswith("mingw"):
        return OS.WINDOWS
    return SYSTEM_ALIASES.get(s, OS.UNKNOWN)


def normalize_arch(machine: str) -> Arch:
    return MACHINE_ALIASES.get(machine.strip().lower(), Arch.UNKNOWN)


def describe_platform(
    system: Optional[str] = None, machine: Optional[str] = None
) -> PlatformDescriptor:
    """Describe a platform; the running host when arguments are omitted."""
    if system is None:
        system = platform.system()
    if machine is None:
        machine = platform.machine()

    os_canonical = normalize_os(system)
    arch_canonical = normalize_arch(machine)

    return PlatformDescriptor(
        os_canonical=os_canonical,
        arch_canonical=arch_canonical,
        os_synonyms=OS_SYNONYMS.get(os_canonical, (os_canonical.value,)),
        arch_synonyms=ARCH_SYNONYMS.get(arch_canonical, (arch_canonical.value,)),
    )


def is_platform_supported(descriptor: Optional[PlatformDescriptor] = None) -> bool:
    """Check whether the platform has known OS and arch tokens."""
    descriptor = descriptor or describe_platform()
    return (
        descriptor.os_canonical != OS.UNKNOWN
        and descriptor.arch_canonical != Arch.UNKNOWN
    )
