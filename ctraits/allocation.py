"""Allocation records: how a value's memory was obtained and how big it is."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ctraits.classifier import resolve
from ctraits.ctype import CValue, as_value
from ctraits.kinds import POINTER_SIZE
from ctraits.probe import AllocatorProbe, default_probe


class AllocationMethod(Enum):
    DYNAMIC = "dynamic"
    ALLOCATED = "allocated"
    FIXED = "fixed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AllocationRecord:
    """What is known about the memory behind one inspected value.

    ``ALLOCATED``: ``totalsize`` is the allocator's usable size, which may
    exceed what was requested, so ``arraysize`` is an upper bound.
    ``FIXED``: sizes and ``arraysize`` are exact.
    ``DYNAMIC``: nothing is known; ``totalsize`` and ``arraysize`` are
    whatever the probe said (normally 0) and the caller must keep count.
    """
    name: str
    method: AllocationMethod
    pointer_depth: int
    typesize: int
    totalsize: int
    arraysize: int

    @property
    def is_trustworthy(self) -> bool:
        return self.method is not AllocationMethod.DYNAMIC and self.typesize > 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "method": self.method.value,
            "pointer_depth": self.pointer_depth,
            "typesize": self.typesize,
            "totalsize": self.totalsize,
            "arraysize": self.arraysize,
        }


def is_fixed_array(value: Any) -> bool:
    """True when the value's footprint differs from that of one pointer.

    A block declared in place has the footprint of all its elements; a pointer
    has the footprint of an address. The test cannot tell the two apart when
    they are the same size: ``char[8]``, ``short[4]`` and ``int[2]`` on a
    64-bit platform read as pointers. Whoever holds such a block already knows
    its size.
    """
    return as_value(value).size != POINTER_SIZE


def _count(totalsize: int, typesize: int) -> int:
    return totalsize // typesize if typesize > 0 else 0


def _fixed_element_size(value: CValue) -> int:
    ctype = value.ctype
    if ctype.extent:
        return value.size // ctype.extent
    if not ctype.pointers:
        return value.size
    return ctype.element().sizeof()


def allocated_info(value: Any, probe: Optional[AllocatorProbe] = None,
                   name: Optional[str] = None) -> AllocationRecord:
    """Build the allocation record for a pointer or array.

    The first rule that applies decides the method:

    1. the probe reports a usable size for the value's address: ALLOCATED;
    2. the value's footprint is not that of one pointer: FIXED;
    3. otherwise: DYNAMIC.

    Values without an address (declarations, NULL pointers, ctypes arrays and
    scalars held in place) are never probed.
    Nothing is read from, written to or freed at the address.
    """
    v = as_value(value, name=name)
    probe = probe if probe is not None else default_probe()
    facts = resolve(v)
    usable = probe.usable_size(v.address) if v.address else 0

    if usable > 0:
        method = AllocationMethod.ALLOCATED
        typesize = facts.element_size
        totalsize = usable
    elif is_fixed_array(v):
        method = AllocationMethod.FIXED
        typesize = _fixed_element_size(v)
        totalsize = v.size
    else:
        method = AllocationMethod.DYNAMIC
        typesize = facts.element_size
        totalsize = usable

    return AllocationRecord(
        name=v.name,
        method=method,
        pointer_depth=facts.pointer_depth,
        typesize=typesize,
        totalsize=totalsize,
        arraysize=_count(totalsize, typesize),
    )
