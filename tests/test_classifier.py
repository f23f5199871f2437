import ctypes

import pytest

from ctraits import (
    CType,
    PrimitiveKind,
    TYPE_TABLE,
    UNKNOWN_FACTS,
    classify_kind,
    element_size,
    is_const,
    is_const_pointer,
    is_kind,
    is_ldouble,
    is_uchar,
    is_ullong,
    is_void,
    pointer_depth,
    resolve,
    type_number,
)
from ctraits.kinds import SUPPORTED_KINDS, ctypes_type, kind_from_short_name


def _declaration(kind, depth, const, const_pointer):
    prefix = "const " if const else ""
    stars = "*" * depth
    if const_pointer:
        stars += " const"
    return f"{prefix}{kind.value} {stars} x"


def _expected_size(kind):
    if kind is PrimitiveKind.VOID:
        return 0
    return ctypes.sizeof(ctypes_type(kind))


def _grid():
    for kind in SUPPORTED_KINDS:
        for depth in range(0, 5):
            if kind is PrimitiveKind.VOID and depth == 0:
                continue
            for const in (False, True):
                for const_pointer in ((False, True) if depth else (False,)):
                    yield kind, depth, const, const_pointer


GRID = list(_grid())


def test_table_covers_every_listed_type():
    assert len(TYPE_TABLE) == 286
    assert len(GRID) == 286


@pytest.mark.parametrize("kind,depth,const,const_pointer", GRID)
def test_declared_types_resolve_to_their_facts(kind, depth, const, const_pointer):
    decl = _declaration(kind, depth, const, const_pointer)
    assert classify_kind(decl) is kind
    assert pointer_depth(decl) == depth
    assert element_size(decl) == _expected_size(kind)
    assert is_const(decl) is const
    assert is_const_pointer(decl) is const_pointer
    assert resolve(decl).supported


@pytest.mark.parametrize("kind", [k for k in SUPPORTED_KINDS if k is not PrimitiveKind.VOID])
def test_each_extra_pointer_level_adds_one(kind):
    for depth in range(0, 4):
        inner = CType(kind, pointers=(False,) * depth)
        outer = CType(kind, pointers=(False,) * (depth + 1))
        assert pointer_depth(outer) == pointer_depth(inner) + 1


def test_depth_beyond_four_is_unsupported():
    assert pointer_depth("int ***** p") == 0
    assert classify_kind("int ***** p") is PrimitiveKind.UNKNOWN
    assert element_size("int ***** p") == 0
    assert resolve("int ***** p") == UNKNOWN_FACTS


@pytest.mark.parametrize("decl,const,const_pointer", [
    ("int * p", False, False),
    ("int * const p", False, True),
    ("const int * p", True, False),
    ("const int * const p", True, True),
    ("int const * const p", True, True),
    ("double *** const p", False, True),
])
def test_qualifiers_are_independent(decl, const, const_pointer):
    assert is_const(decl) is const
    assert is_const_pointer(decl) is const_pointer


def test_const_outer_pointer_to_mutable_int():
    decl = "int ** const pp"
    assert is_const_pointer(decl)
    assert not is_const(decl)
    assert pointer_depth(decl) == 2
    assert classify_kind(decl) is PrimitiveKind.INT


def test_const_in_middle_of_chain_is_not_classified():
    decl = "int * const * p"
    assert classify_kind(decl) is PrimitiveKind.UNKNOWN
    assert pointer_depth(decl) == 0
    assert not is_const(decl)
    assert not is_const_pointer(decl)


def test_scalar_is_never_a_const_pointer():
    assert is_const("const int x")
    assert not is_const_pointer("const int x")
    assert pointer_depth("const int x") == 0
    assert element_size("const int x") == ctypes.sizeof(ctypes.c_int)


def test_arrays_decay_to_one_pointer_level():
    assert classify_kind("short buf[8]") is PrimitiveKind.SHORT
    assert pointer_depth("short buf[8]") == 1
    assert element_size("short buf[8]") == ctypes.sizeof(ctypes.c_short)
    assert pointer_depth("char *names[4]") == 2
    assert element_size("char *names[4]") == 1


def test_const_array_elements():
    assert is_const("const int table[4]")
    assert not is_const_pointer("const int table[4]")


def test_unsupported_bases_fall_back_to_unknown():
    for value in ("struct node *", "union u", 3.5, object()):
        assert classify_kind(value) is PrimitiveKind.UNKNOWN
        assert pointer_depth(value) == 0
        assert element_size(value) == 0
        assert not is_const(value)
        assert type_number(value) == 0


def test_void_pointer_has_no_element_size():
    assert is_void("void * p")
    assert element_size("void * p") == 0
    assert pointer_depth("void **** p") == 4


def test_plain_void_is_not_classified():
    assert classify_kind("void") is PrimitiveKind.UNKNOWN


@pytest.mark.parametrize("decl,number", [
    ("bool b", 1),
    ("const bool b", 2),
    ("unsigned long long x", 29),
    ("const unsigned long long x", 30),
    ("void * p", 31),
    ("const void * p", 32),
    ("void * const p", 33),
    ("const void * const p", 34),
    ("int * p", 47),
    ("const int * const p", 50),
    ("const unsigned long long **** const p", 286),
])
def test_type_numbers_follow_table_order(decl, number):
    assert type_number(decl) == number


def test_kind_predicates():
    assert is_ullong("unsigned long long int x")
    assert is_ldouble("const long double ** p")
    assert is_uchar("unsigned char buf[16]")
    assert not is_uchar("signed char c")
    assert is_kind("unsigned x", "uint")
    assert is_kind("unsigned x", PrimitiveKind.UINT)
    assert not is_kind("unsigned x", "nonsense")


def test_ctypes_values_are_classified():
    assert classify_kind(ctypes.c_int(3)) is PrimitiveKind.INT
    assert pointer_depth(ctypes.c_int(3)) == 0

    pp = ctypes.POINTER(ctypes.POINTER(ctypes.c_double))
    assert classify_kind(pp) is PrimitiveKind.DOUBLE
    assert pointer_depth(pp) == 2

    assert classify_kind(ctypes.c_void_p()) is PrimitiveKind.VOID
    assert pointer_depth(ctypes.c_char_p(b"hi")) == 1
    assert classify_kind(ctypes.c_char_p) is PrimitiveKind.CHAR

    buf = (ctypes.c_short * 8)()
    assert classify_kind(buf) is PrimitiveKind.SHORT
    assert pointer_depth(buf) == 1


def test_ctypes_long_long_aliasing():
    expected = PrimitiveKind.LONG if ctypes.c_longlong is ctypes.c_long else PrimitiveKind.LLONG
    assert classify_kind(ctypes.c_longlong(1)) is expected


def test_ctypes_structures_are_unknown():
    class Point(ctypes.Structure):
        _fields_ = [("x", ctypes.c_int), ("y", ctypes.c_int)]

    assert classify_kind(Point()) is PrimitiveKind.UNKNOWN
    assert classify_kind(ctypes.POINTER(Point)) is PrimitiveKind.UNKNOWN


def test_neutral_names_answer_the_same_queries():
    from ctraits import indirection_depth, is_final_link_immutable, is_immutable

    decl = "int ** const pp"
    assert indirection_depth(decl) == 2
    assert is_final_link_immutable(decl)
    assert not is_immutable(decl)


@pytest.mark.parametrize("kind", SUPPORTED_KINDS)
def test_short_names_round_trip(kind):
    assert kind_from_short_name(kind.short_name) is kind
    assert is_kind(CType(kind, pointers=(False,)), kind.short_name)


def test_unknown_short_name():
    assert kind_from_short_name("unknown") is PrimitiveKind.UNKNOWN
    assert kind_from_short_name("int8") is PrimitiveKind.UNKNOWN
