# ctraits/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ctraits.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL = "general"
    SYNTAX = "syntax"
    TYPE = "type"
    ALLOC = "allocation"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)


class DeclarationError(ValueError):
    """A C declaration could not be turned into a type.

    ``column`` is 1-based and points into the declaration text when known.
    """

    def __init__(self, code: str, message: str, text: str, column: Optional[int] = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.text = text
        self.column = column

    @property
    def span(self) -> Optional[Span]:
        if self.column is None:
            return None
        return Span(1, self.column, 1, self.column)


def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], source: Optional[str] = None, **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span, source)
    else:
        r.warn(em.code, text, span, source)

def raise_declaration_error(code: str, text: str, column: Optional[int] = None, **kwargs) -> None:
    """Raise a DeclarationError for declaration ``text``.

    Args:
        code: Error code (e.g., "CT0001")
        text: The declaration being parsed
        column: 1-based column of the offending token, if known
        **kwargs: Format parameters for the error message

    Raises:
        DeclarationError: Always
    """
    raise DeclarationError(code, _fmt(code, text=text, **kwargs), text, column)


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Declaration syntax - CT00xx range
_add(ErrorMessage("CT0001", Severity.ERROR,
    "cannot parse declaration '{text}'",
    Category.SYNTAX, "The text is not a C declaration or type name."))

_add(ErrorMessage("CT0002", Severity.ERROR,
    "unexpected '{token}' in declaration '{text}'",
    Category.SYNTAX, "A token appeared where the grammar does not allow it."))

_add(ErrorMessage("CT0003", Severity.ERROR,
    "declaration '{text}' ends early",
    Category.SYNTAX, "The declaration stops before a type is complete."))

_add(ErrorMessage("CT0004", Severity.ERROR,
    "invalid combination of type specifiers '{specifiers}' in '{text}'",
    Category.TYPE, "Specifiers such as 'unsigned double' or 'short long' do not name a type."))

_add(ErrorMessage("CT0005", Severity.ERROR,
    "array extent must be positive, got {extent} in '{text}'",
    Category.TYPE, "Fixed arrays need at least one element."))

_add(ErrorMessage("CT0006", Severity.ERROR,
    "'{text}' declares an array of void",
    Category.TYPE, "void has no size, so a fixed block of it has no storage."))

_add(ErrorMessage("CT0007", Severity.ERROR,
    "declaration '{text}' has no type specifier",
    Category.TYPE, "A declaration needs a base type such as 'int' or 'struct name'."))

# Classification - CT01xx range
_add(ErrorMessage("CT0100", Severity.WARNING,
    "'{name}' has type '{ctype}' which is not classified; facts are unknown",
    Category.TYPE, "Unsupported base type, mid-chain const, or more than four pointer levels."))

# Allocation records - CT02xx range
_add(ErrorMessage("CT0200", Severity.WARNING,
    "'{name}' is a fixed block of {size} bytes, the size of one pointer; it is reported as '{method}'",
    Category.ALLOC, "A fixed array whose footprint equals a pointer cannot be told apart from one."))

_add(ErrorMessage("CT0201", Severity.WARNING,
    "'{name}' has no reliable size information; track its element count yourself",
    Category.ALLOC, "Dynamic records carry no trustworthy total or element count."))
