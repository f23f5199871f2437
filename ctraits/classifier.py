"""Type classification by table lookup.

C resolves these facts at compile time by matching an expression's exact
static type against a fixed list of types, falling back to a default for
anything unlisted. Here the list is ``TYPE_TABLE``: built once at import,
keyed by the canonical spelling of a ``CType``, and every lookup that misses
yields ``UNKNOWN_FACTS`` instead of failing.

Two keys are used per value, mirroring what a C compiler sees:

* the *converted* type, after lvalue conversion (top-level ``const``
  dropped, arrays decayed to a pointer to their first element), for kind,
  depth and element size;
* the *declared* type, as written, for the qualifiers of the declared
  object itself.

Coverage is 15 scalar kinds at depth 0 and 16 kinds (``void`` included) at
depths 1 through 4, each with and without ``const`` on the scalar and, for
pointers, on the outermost pointer. A ``const`` anywhere else in the chain,
unsupported bases and deeper chains all miss.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Union

from ctraits.ctype import CType, CValue, as_value
from ctraits.kinds import (
    MAX_POINTER_DEPTH,
    PrimitiveKind,
    SCALAR_KINDS,
    SUPPORTED_KINDS,
    kind_from_short_name,
    scalar_size,
)


@dataclass(frozen=True)
class TypeFacts:
    """Everything the table knows about one exact type."""
    kind: PrimitiveKind
    pointer_depth: int
    is_const: bool          # The scalar at the end of the chain is const
    is_const_pointer: bool  # The outermost pointer itself is const
    element_size: int       # Size of the scalar after full dereference
    type_number: int        # 1-based position in the table
    supported: bool = True


UNKNOWN_FACTS = TypeFacts(
    kind=PrimitiveKind.UNKNOWN,
    pointer_depth=0,
    is_const=False,
    is_const_pointer=False,
    element_size=0,
    type_number=0,
    supported=False,
)


def _build_table() -> Dict[str, TypeFacts]:
    table: Dict[str, TypeFacts] = {}

    def add(ctype: CType) -> None:
        table[str(ctype)] = TypeFacts(
            kind=ctype.kind,
            pointer_depth=ctype.depth,
            is_const=ctype.const,
            is_const_pointer=bool(ctype.pointers) and ctype.pointers[-1],
            element_size=scalar_size(ctype.kind),
            type_number=len(table) + 1,
        )

    for kind in SCALAR_KINDS:
        for const in (False, True):
            add(CType(kind, const=const))

    # Per kind: T*, const T*, T* const, const T* const
    for depth in range(1, MAX_POINTER_DEPTH + 1):
        inner = (False,) * (depth - 1)
        for kind in SUPPORTED_KINDS:
            for outer_const in (False, True):
                for const in (False, True):
                    add(CType(kind, const=const, pointers=inner + (outer_const,)))

    return table


TYPE_TABLE: Dict[str, TypeFacts] = _build_table()


def _converted_facts(value: CValue) -> TypeFacts:
    return TYPE_TABLE.get(str(value.ctype.decayed()), UNKNOWN_FACTS)


def _declared_facts(value: CValue) -> TypeFacts:
    return TYPE_TABLE.get(str(value.ctype), UNKNOWN_FACTS)


def resolve(value: Any) -> TypeFacts:
    """Look up the facts for ``value`` as a C expression of its type."""
    return _converted_facts(as_value(value))


def classify_kind(value: Any) -> PrimitiveKind:
    """Primitive kind at the end of the pointer chain, UNKNOWN if unsupported."""
    return resolve(value).kind


def pointer_depth(value: Any) -> int:
    """Number of pointer levels, 0 to 4.

    Arrays count as one level since they decay to a pointer. Unsupported types,
    including chains deeper than four, read 0; ``resolve(value).supported``
    tells the two apart.
    """
    return resolve(value).pointer_depth


def is_const(value: Any) -> bool:
    """True if the scalar the value designates is declared const.

    Checked on the declared type and on the converted type, so it holds for
    scalars, pointers and arrays alike.
    """
    v = as_value(value)
    return _declared_facts(v).is_const or _converted_facts(v).is_const


def is_const_pointer(value: Any) -> bool:
    """True if the pointer being declared is itself const (``int ** const p``).

    Independent of ``is_const``; always False for scalars and arrays.
    """
    return _declared_facts(as_value(value)).is_const_pointer


def element_size(value: Any) -> int:
    """Size in bytes of the scalar reached after dereferencing every level.

    For a scalar this is its own size. ``void`` pointers and unsupported types
    read 0.
    """
    return resolve(value).element_size


def type_number(value: Any) -> int:
    """Position of the declared type in the table, 0 when not listed."""
    return _declared_facts(as_value(value)).type_number


def is_kind(value: Any, kind: Union[PrimitiveKind, str]) -> bool:
    if isinstance(kind, str):
        kind = kind_from_short_name(kind)
    return classify_kind(value) is kind


def is_void(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.VOID)


def is_bool(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.BOOL)


def is_char(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.CHAR)


def is_schar(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.SCHAR)


def is_uchar(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.UCHAR)


def is_short(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.SHORT)


def is_ushort(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.USHORT)


def is_int(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.INT)


def is_uint(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.UINT)


def is_long(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.LONG)


def is_ulong(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.ULONG)


def is_llong(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.LLONG)


def is_ullong(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.ULLONG)


def is_float(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.FLOAT)


def is_double(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.DOUBLE)


def is_ldouble(value: Any) -> bool:
    return is_kind(value, PrimitiveKind.LDOUBLE)


# Qualifier-neutral names for the same queries.
indirection_depth = pointer_depth
is_immutable = is_const
is_final_link_immutable = is_const_pointer
