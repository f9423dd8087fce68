"""Default host introspection built on :mod:`platform`.

Installers with richer toolchain knowledge can pass their own
:class:`pkgreceipt.core.ports.HostIntrospection` to the factory instead.
"""

from __future__ import annotations

import platform

_ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "i386": "i386",
    "i686": "i386",
}


class PlatformHost:
    """Host descriptors from the running interpreter's view of the machine."""

    def cpu_arch(self) -> str:
        machine = platform.machine().lower()
        return _ARCH_ALIASES.get(machine, machine or "unknown")

    def current_build_environment(self) -> dict[str, str]:
        """OS, OS version, CPU family and the compiler that built this Python."""
        return {
            "os": platform.system() or "unknown",
            "os_version": platform.release() or "unknown",
            "cpu_family": self.cpu_arch(),
            "python_compiler": platform.python_compiler() or "unknown",
        }

    def generic_build_environment(self) -> dict[str, str]:
        """Only the OS name; used for receipts with no real install context."""
        return {"os": platform.system() or "unknown"}
