"""Primitive C scalar kinds and their platform sizes.

The set of kinds is closed: every supported base type maps to exactly one
member, anything else is ``PrimitiveKind.UNKNOWN``.
"""
from __future__ import annotations
import ctypes
from enum import Enum
from typing import Optional


# Deepest pointer chain the type table covers (``T****``).
MAX_POINTER_DEPTH = 4


class PrimitiveKind(Enum):
    VOID = "void"
    BOOL = "bool"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    LLONG = "long long"
    DOUBLE = "double"
    FLOAT = "float"
    LDOUBLE = "long double"
    SCHAR = "signed char"
    UCHAR = "unsigned char"
    USHORT = "unsigned short"
    UINT = "unsigned int"
    ULONG = "unsigned long"
    ULLONG = "unsigned long long"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def short_name(self) -> str:
        """Abbreviated name used by the ``is_<kind>`` predicates (``ullong``)."""
        return self.name.lower()


# Table order; member definition order above already follows it.
SUPPORTED_KINDS: tuple[PrimitiveKind, ...] = tuple(
    k for k in PrimitiveKind if k is not PrimitiveKind.UNKNOWN
)

# Kinds that may appear without indirection. A ``void`` object does not exist.
SCALAR_KINDS: tuple[PrimitiveKind, ...] = tuple(
    k for k in SUPPORTED_KINDS if k is not PrimitiveKind.VOID
)


_CTYPES_BY_KIND = {
    PrimitiveKind.BOOL: ctypes.c_bool,
    PrimitiveKind.CHAR: ctypes.c_char,
    PrimitiveKind.SHORT: ctypes.c_short,
    PrimitiveKind.INT: ctypes.c_int,
    PrimitiveKind.LONG: ctypes.c_long,
    PrimitiveKind.LLONG: ctypes.c_longlong,
    PrimitiveKind.DOUBLE: ctypes.c_double,
    PrimitiveKind.FLOAT: ctypes.c_float,
    PrimitiveKind.LDOUBLE: ctypes.c_longdouble,
    PrimitiveKind.SCHAR: ctypes.c_byte,
    PrimitiveKind.UCHAR: ctypes.c_ubyte,
    PrimitiveKind.USHORT: ctypes.c_ushort,
    PrimitiveKind.UINT: ctypes.c_uint,
    PrimitiveKind.ULONG: ctypes.c_ulong,
    PrimitiveKind.ULLONG: ctypes.c_ulonglong,
}

# Reverse lookup. ctypes aliases c_longlong to c_long (and the unsigned pair)
# where both are 64 bits; the first registration wins, so those read as long.
_KIND_BY_CTYPES: dict[type, PrimitiveKind] = {}
for _kind, _ctype in _CTYPES_BY_KIND.items():
    _KIND_BY_CTYPES.setdefault(_ctype, _kind)
del _kind, _ctype

_KIND_BY_SHORT_NAME = {k.short_name: k for k in SUPPORTED_KINDS}

POINTER_SIZE = ctypes.sizeof(ctypes.c_void_p)


def ctypes_type(kind: PrimitiveKind) -> Optional[type]:
    """Return the ctypes scalar type for ``kind`` (None for void and unknown)."""
    return _CTYPES_BY_KIND.get(kind)


def kind_of_ctypes(ctype: type) -> PrimitiveKind:
    """Map a ctypes scalar type to its kind, UNKNOWN when it is not one."""
    return _KIND_BY_CTYPES.get(ctype, PrimitiveKind.UNKNOWN)


def scalar_size(kind: PrimitiveKind) -> int:
    """Size in bytes of one scalar of ``kind`` on this platform.

    ``void`` and unknown kinds have no element size and read 0.
    """
    ctype = _CTYPES_BY_KIND.get(kind)
    if ctype is None:
        return 0
    return ctypes.sizeof(ctype)


def kind_from_short_name(name: str) -> PrimitiveKind:
    """Look up a kind by its abbreviated name (``uint``, ``ldouble``)."""
    return _KIND_BY_SHORT_NAME.get(name, PrimitiveKind.UNKNOWN)
