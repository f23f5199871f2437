"""C type and value model.

A ``CType`` is the static type a C compiler would see for a declaration; a
``CValue`` pairs it with what is known about one particular value at run time
(display name, address, in-memory footprint).
"""
from __future__ import annotations
import ctypes
from dataclasses import dataclass, replace
from typing import Any, Optional

from ctraits.kinds import PrimitiveKind, POINTER_SIZE, kind_of_ctypes, scalar_size

ANONYMOUS = "<anonymous>"

_CTYPES_DATA = (ctypes._SimpleCData, ctypes.Array, ctypes._Pointer, ctypes.Structure, ctypes.Union)


@dataclass(frozen=True)
class CType:
    """A possibly qualified scalar, pointer chain or fixed array of either.

    ``pointers`` holds one ``const`` flag per indirection level, innermost
    (nearest the scalar) first, so ``int * const * p`` is ``(True, False)``
    and ``int ** const p`` is ``(False, True)``.
    """
    kind: PrimitiveKind
    const: bool = False
    pointers: tuple[bool, ...] = ()
    extent: Optional[int] = None
    base_name: Optional[str] = None  # Spelling of an unsupported base (e.g. "struct foo")

    @property
    def depth(self) -> int:
        return len(self.pointers)

    @property
    def is_array(self) -> bool:
        return self.extent is not None

    @property
    def base_spelling(self) -> str:
        if self.kind is PrimitiveKind.UNKNOWN and self.base_name:
            return self.base_name
        return self.kind.value

    def __str__(self) -> str:
        text = f"const {self.base_spelling}" if self.const else self.base_spelling
        if self.pointers:
            chain = "".join("* const " if c else "*" for c in self.pointers)
            text = f"{text} {chain}".rstrip()
        if self.extent is not None:
            text = f"{text}[{self.extent}]"
        return text

    def decayed(self) -> CType:
        """Type of the value after lvalue conversion.

        Top-level ``const`` is dropped and an array becomes a mutable pointer
        to its first element.
        """
        if self.extent is not None:
            return replace(self, pointers=self.pointers + (False,), extent=None)
        if self.pointers:
            return replace(self, pointers=self.pointers[:-1] + (False,))
        return replace(self, const=False)

    def element(self) -> CType:
        """Type of ``*x``: the array element or the pointee.

        A scalar is treated as its own single element.
        """
        if self.extent is not None:
            return replace(self, extent=None)
        if self.pointers:
            return replace(self, pointers=self.pointers[:-1])
        return self

    def sizeof(self) -> int:
        """Static footprint in bytes, 0 for an unsupported base at depth 0."""
        size = POINTER_SIZE if self.pointers else scalar_size(self.kind)
        if self.extent is not None:
            size *= self.extent
        return size


@dataclass(frozen=True)
class CValue:
    """A typed value presented for inspection.

    ``address`` is where separately stored data lives (the pointee of a
    pointer); None for values held in place and when unknown. ``footprint``
    overrides the static size computed from ``ctype``.
    """
    ctype: CType
    name: str = ANONYMOUS
    address: Optional[int] = None
    footprint: Optional[int] = None

    @property
    def size(self) -> int:
        if self.footprint is not None:
            return self.footprint
        return self.ctype.sizeof()

    @classmethod
    def from_ctypes(cls, obj: Any, name: Optional[str] = None) -> CValue:
        """Build a value from a ctypes instance or type.

        ctypes has no notion of ``const``, so the result is always mutable.
        """
        if isinstance(obj, type):
            return cls(ctype_of_ctypes(obj), name=name or obj.__name__, footprint=ctypes.sizeof(obj))
        ctype = ctype_of_ctypes(type(obj))
        return cls(
            ctype,
            name=name or ANONYMOUS,
            address=_address_of(obj),
            footprint=ctypes.sizeof(obj),
        )


def ctype_of_ctypes(t: type) -> CType:
    """Translate a ctypes type into a ``CType``."""
    extent = None
    if issubclass(t, ctypes.Array):
        extent = t._length_
        t = t._type_

    depth = 0
    while True:
        if t is ctypes.c_void_p:
            kind = PrimitiveKind.VOID
            depth += 1
            break
        if t is ctypes.c_char_p:
            kind = PrimitiveKind.CHAR
            depth += 1
            break
        if issubclass(t, ctypes._Pointer):
            depth += 1
            t = t._type_
            continue
        kind = kind_of_ctypes(t)
        break

    base_name = t.__name__ if kind is PrimitiveKind.UNKNOWN else None
    return CType(kind, pointers=(False,) * depth, extent=extent, base_name=base_name)


def _address_of(obj: Any) -> Optional[int]:
    # Only a pointer designates separately stored data; arrays and scalars
    # are held in place inside the Python object.
    if isinstance(obj, (ctypes._Pointer, ctypes.c_void_p, ctypes.c_char_p)):
        return ctypes.cast(obj, ctypes.c_void_p).value
    return None


def as_value(value: Any, name: Optional[str] = None) -> CValue:
    """Coerce anything the classifier accepts into a ``CValue``.

    Accepts a ``CValue``, a ``CType``, a C declaration string, or a ctypes
    instance or type. Any other object is an unsupported type, not an error.
    """
    match value:
        case CValue():
            return value if name is None else replace(value, name=name)
        case CType():
            return CValue(value, name=name or ANONYMOUS)
        case str():
            from ctraits.declarations import declare
            declared = declare(value)
            return declared if name is None else replace(declared, name=name)
        case type() if issubclass(value, _CTYPES_DATA):
            return CValue.from_ctypes(value, name=name)
        case _ if isinstance(value, _CTYPES_DATA):
            return CValue.from_ctypes(value, name=name)
        case _:
            unknown = CType(PrimitiveKind.UNKNOWN, base_name=f"<{type(value).__name__}>")
            return CValue(unknown, name=name or ANONYMOUS)
