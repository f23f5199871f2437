"""Allocator usable-size probes.

A probe answers one question: how many usable bytes does the allocator hold
at this address? Zero means "not a separate allocation" or "cannot tell".
The allocation record builder takes a probe as an argument so callers and
tests can swap in a deterministic one.
"""
from __future__ import annotations
import ctypes
from functools import lru_cache
from typing import Mapping, Optional, Protocol

from ctraits.platform_detect import TargetPlatform, get_current_platform


class AllocatorProbe(Protocol):
    def usable_size(self, address: int) -> int:
        ...


class NullProbe:
    """A probe for platforms without allocator introspection."""

    def usable_size(self, address: int) -> int:
        return 0

    def __repr__(self) -> str:
        return "NullProbe()"


class FixedProbe:
    """Answers from a known ``address -> usable size`` mapping."""

    def __init__(self, sizes: Optional[Mapping[int, int]] = None) -> None:
        self.sizes = dict(sizes or {})

    def usable_size(self, address: int) -> int:
        return self.sizes.get(address, 0)

    def __repr__(self) -> str:
        return f"FixedProbe({self.sizes!r})"


class LibcUsableSizeProbe:
    """Calls the host C allocator's usable-size query through ctypes.

    ``malloc_usable_size`` on Linux, ``malloc_size`` on macOS and ``_msize``
    on Windows (``ucrtbase``, else ``msvcrt``). When the symbol cannot be
    bound the probe reads 0 for every address. Asking about memory that did
    not come from the C allocator is platform-defined; the probe relays
    whatever the allocator reports, so callers pass only heap addresses.
    """

    def __init__(self, platform: Optional[TargetPlatform] = None) -> None:
        self.platform = platform or get_current_platform()
        libraries, self.symbol = self.platform.usable_size_query
        self.library = None
        self._query = None
        for library in libraries if self.symbol is not None else ():
            try:
                query = getattr(ctypes.CDLL(library), self.symbol)
            except (OSError, AttributeError):
                continue
            query.restype = ctypes.c_size_t
            query.argtypes = [ctypes.c_void_p]
            self.library = library
            self._query = query
            break

    @property
    def available(self) -> bool:
        return self._query is not None

    def usable_size(self, address: int) -> int:
        if self._query is None or not address:
            return 0
        return int(self._query(address))

    def __repr__(self) -> str:
        return f"LibcUsableSizeProbe({self.platform.triple!r}, symbol={self.symbol!r}, available={self.available})"


@lru_cache(maxsize=1)
def default_probe() -> LibcUsableSizeProbe:
    """The probe for the running platform, bound once per process."""
    return LibcUsableSizeProbe()
