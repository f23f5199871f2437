"""
Platform detection and target triple parsing.

Decides which host allocator query the usable-size probe binds to.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from llvmlite import binding as llvm


@dataclass
class TargetPlatform:
    """Represents the host platform."""
    arch: str      # arm64, x86_64, riscv64, etc.
    vendor: str    # apple, pc, unknown, etc.
    os: str        # darwin, linux, windows, etc.
    abi: str       # (empty), gnu, musl, msvc, etc.

    @property
    def is_darwin(self) -> bool:
        """Returns True if target is macOS."""
        return self.os == 'darwin'

    @property
    def is_linux(self) -> bool:
        """Returns True if target is Linux."""
        return self.os == 'linux'

    @property
    def is_windows(self) -> bool:
        """Returns True if target is Windows."""
        return self.os in {'windows', 'win32'}

    @property
    def triple(self) -> str:
        """Reconstruct the target triple string."""
        parts = [self.arch, self.vendor, self.os]
        if self.abi:
            parts.append(self.abi)
        return '-'.join(parts)

    @property
    def usable_size_query(self) -> Tuple[Tuple[Optional[str], ...], Optional[str]]:
        """Candidate libraries and the symbol answering "how big is this allocation".

        Libraries are tried in order; None means the running process. Returns
        ``((), None)`` when the platform has no such query. On Windows CPython
        allocates from the UCRT heap, so ``ucrtbase`` comes before ``msvcrt``.
        """
        if self.is_linux:
            return (None,), 'malloc_usable_size'
        if self.is_darwin:
            return (None,), 'malloc_size'
        if self.is_windows:
            return ('ucrtbase', 'msvcrt'), '_msize'
        return (), None


def parse_triple(triple: str) -> TargetPlatform:
    """
    Parse an LLVM target triple into components.

    Examples:
        arm64-apple-darwin25.0.0 -> TargetPlatform(arm64, apple, darwin, '')
        x86_64-pc-linux-gnu -> TargetPlatform(x86_64, pc, linux, gnu)
        x86_64-pc-windows-msvc -> TargetPlatform(x86_64, pc, windows, msvc)
    """
    parts = triple.split('-')

    # Handle version numbers in OS (e.g., darwin25.0.0)
    os_part = parts[2] if len(parts) > 2 else 'unknown'
    if os_part.startswith('darwin') or os_part.startswith('macos'):
        os_part = 'darwin'

    return TargetPlatform(
        arch=parts[0] if len(parts) > 0 else 'unknown',
        vendor=parts[1] if len(parts) > 1 else 'unknown',
        os=os_part,
        abi=parts[3] if len(parts) > 3 else '',
    )


def get_current_platform() -> TargetPlatform:
    """Get the platform this process runs on."""
    return parse_triple(llvm.get_default_triple())
