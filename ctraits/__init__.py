"""ctraits - C type traits and allocation records for typed values."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("ctraits")
    __dev__ = False
except PackageNotFoundError:
    # Development mode - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"
    __dev__ = True

from ctraits.kinds import PrimitiveKind, MAX_POINTER_DEPTH
from ctraits.ctype import CType, CValue, as_value
from ctraits.declarations import parse_ctype, declare, DeclarationError
from ctraits.classifier import (
    TypeFacts,
    UNKNOWN_FACTS,
    TYPE_TABLE,
    resolve,
    classify_kind,
    pointer_depth,
    is_const,
    is_const_pointer,
    element_size,
    type_number,
    is_kind,
    is_void,
    is_bool,
    is_char,
    is_schar,
    is_uchar,
    is_short,
    is_ushort,
    is_int,
    is_uint,
    is_long,
    is_ulong,
    is_llong,
    is_ullong,
    is_float,
    is_double,
    is_ldouble,
    indirection_depth,
    is_immutable,
    is_final_link_immutable,
)
from ctraits.probe import AllocatorProbe, NullProbe, FixedProbe, LibcUsableSizeProbe, default_probe
from ctraits.allocation import AllocationMethod, AllocationRecord, allocated_info, is_fixed_array
from ctraits.formatting import type_name, printtype, describe

__all__ = [
    '__version__',
    'PrimitiveKind',
    'MAX_POINTER_DEPTH',
    'CType',
    'CValue',
    'as_value',
    'parse_ctype',
    'declare',
    'DeclarationError',
    'TypeFacts',
    'UNKNOWN_FACTS',
    'TYPE_TABLE',
    'resolve',
    'classify_kind',
    'pointer_depth',
    'is_const',
    'is_const_pointer',
    'element_size',
    'type_number',
    'is_kind',
    'is_void',
    'is_bool',
    'is_char',
    'is_schar',
    'is_uchar',
    'is_short',
    'is_ushort',
    'is_int',
    'is_uint',
    'is_long',
    'is_ulong',
    'is_llong',
    'is_ullong',
    'is_float',
    'is_double',
    'is_ldouble',
    'indirection_depth',
    'is_immutable',
    'is_final_link_immutable',
    'AllocatorProbe',
    'NullProbe',
    'FixedProbe',
    'LibcUsableSizeProbe',
    'default_probe',
    'AllocationMethod',
    'AllocationRecord',
    'allocated_info',
    'is_fixed_array',
    'type_name',
    'printtype',
    'describe',
]
