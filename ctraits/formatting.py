"""Human-readable rendering of classifier facts."""
from __future__ import annotations
import sys
from typing import Any, Optional, TextIO

from ctraits.classifier import is_const, is_const_pointer, resolve, type_number
from ctraits.ctype import as_value


def type_name(value: Any) -> str:
    """Label such as ``const int ** const``.

    Built from the classifier's answers only, in a fixed order: qualifier,
    kind, pointer markers, outer pointer qualifier.
    """
    v = as_value(value)
    facts = resolve(v)
    label = "const " if is_const(v) else ""
    label += facts.kind.value
    if facts.pointer_depth:
        label += " " + "*" * facts.pointer_depth
    if is_const_pointer(v):
        label += " const"
    return label


def printtype(value: Any, file: Optional[TextIO] = None) -> None:
    v = as_value(value)
    print(f'The type of the variable "{v.name}": {type_name(v)}', file=file or sys.stdout)


def describe(value: Any) -> dict:
    """Classifier facts for ``value`` as plain data."""
    v = as_value(value)
    facts = resolve(v)
    return {
        "name": v.name,
        "declared": str(v.ctype),
        "label": type_name(v),
        "kind": facts.kind.value,
        "pointer_depth": facts.pointer_depth,
        "is_const": is_const(v),
        "is_const_pointer": is_const_pointer(v),
        "element_size": facts.element_size,
        "type_number": type_number(v),
        "supported": facts.supported,
    }
