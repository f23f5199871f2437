"""Lark parser for C declarations and type names."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Transformer, UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from ctraits.ctype import CType, CValue, ANONYMOUS
from ctraits.errors import DeclarationError, raise_declaration_error
from ctraits.kinds import PrimitiveKind

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

__all__ = ["parse_ctype", "declare", "DeclarationError"]


def _integer_family(base: str, signed: PrimitiveKind, unsigned: PrimitiveKind) -> dict:
    """All specifier spellings of one integer width, ``int`` being optional."""
    words = base.split()
    table = {}
    for sign, kind in (((), signed), (("signed",), signed), (("unsigned",), unsigned)):
        for tail in ((), ("int",)):
            key = tuple(sorted(words + list(sign) + list(tail)))
            table[key] = kind
    return table


# Sorted specifier words -> kind, e.g. ('int', 'long', 'unsigned') -> ULONG
_SPECIFIER_KINDS = {
    ("void",): PrimitiveKind.VOID,
    ("bool",): PrimitiveKind.BOOL,
    ("char",): PrimitiveKind.CHAR,
    ("char", "signed"): PrimitiveKind.SCHAR,
    ("char", "unsigned"): PrimitiveKind.UCHAR,
    ("int",): PrimitiveKind.INT,
    ("int", "signed"): PrimitiveKind.INT,
    ("signed",): PrimitiveKind.INT,
    ("int", "unsigned"): PrimitiveKind.UINT,
    ("unsigned",): PrimitiveKind.UINT,
    ("float",): PrimitiveKind.FLOAT,
    ("double",): PrimitiveKind.DOUBLE,
    ("double", "long"): PrimitiveKind.LDOUBLE,
    **_integer_family("short", PrimitiveKind.SHORT, PrimitiveKind.USHORT),
    **_integer_family("long", PrimitiveKind.LONG, PrimitiveKind.ULONG),
    **_integer_family("long long", PrimitiveKind.LLONG, PrimitiveKind.ULLONG),
}


@dataclass
class _Declaration:
    specifiers: List[Token]
    const: bool
    tag: Optional[str]
    pointers: Tuple[bool, ...]
    name: Optional[str]
    extent: Optional[Token]


class _DeclarationBuilder(Transformer):
    """Flatten the parse tree into a ``_Declaration``; validation happens later."""

    def builtin(self, children):
        return children[0]

    def tag(self, children):
        return str(children[0])

    def tagged(self, children):
        tag, name = children
        return ("tag", f"{tag} {name}")

    def pointer(self, children):
        return ("pointer", any(c.type == "CONST" for c in children[1:]))

    def extent(self, children):
        return children[0]

    def declarator(self, children):
        name = None
        extent = None
        for child in children:
            if isinstance(child, Token) and child.type == "NAME":
                name = str(child)
            else:
                extent = child
        return ("declarator", name, extent)

    def declaration(self, children):
        specifiers: List[Token] = []
        const = False
        tag = None
        pointers: List[bool] = []
        name = None
        extent = None
        for child in children:
            match child:
                case Token(type="CONST"):
                    const = True
                case Token():
                    specifiers.append(child)
                case ("tag", spelling):
                    if tag is not None:
                        specifiers.append(Token("NAME", spelling))
                    tag = spelling
                case ("pointer", ptr_const):
                    pointers.append(ptr_const)
                case ("declarator", decl_name, decl_extent):
                    name, extent = decl_name, decl_extent
        return _Declaration(specifiers, const, tag, tuple(pointers), name, extent)

    def start(self, children):
        return children[0]


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark.open(
        str(GRAMMAR_PATH),
        parser="lalr",
        lexer="basic",
        propagate_positions=True,
        maybe_placeholders=False,
    )


def _syntax_error(text: str, e: UnexpectedInput) -> None:
    column = getattr(e, "column", None)
    column = column if isinstance(column, int) and column > 0 else None
    match e:
        case UnexpectedEOF():
            raise_declaration_error("CT0003", text, column)
        case UnexpectedToken() if e.token.type == "$END":
            raise_declaration_error("CT0003", text, column)
        case UnexpectedToken():
            raise_declaration_error("CT0002", text, column, token=str(e.token))
        case UnexpectedCharacters():
            raise_declaration_error("CT0002", text, column, token=text[e.pos_in_stream])
        case _:
            raise_declaration_error("CT0001", text, column)


def _resolve_base(text: str, decl: _Declaration) -> Tuple[PrimitiveKind, Optional[str]]:
    words = ["bool" if str(tok) == "_Bool" else str(tok) for tok in decl.specifiers]
    if decl.tag is not None:
        if words:
            raise_declaration_error(
                "CT0004", text, decl.specifiers[0].column, specifiers=" ".join(words + [decl.tag])
            )
        return PrimitiveKind.UNKNOWN, decl.tag

    if not words:
        raise_declaration_error("CT0007", text)
    kind = _SPECIFIER_KINDS.get(tuple(sorted(words)))
    if kind is None:
        raise_declaration_error(
            "CT0004", text, decl.specifiers[0].column, specifiers=" ".join(words)
        )
    return kind, None


def _parse_extent(digits: str) -> int:
    if digits[:2].lower() == "0x":
        return int(digits, 16)
    return int(digits, 10)


def parse_ctype(text: str) -> Tuple[Optional[str], CType]:
    """Parse a C declaration or type name.

    Returns the declared identifier (None for an abstract type name such as
    ``"const int *"``) and its ``CType``.

    Raises:
        DeclarationError: If ``text`` is not a declaration of a supported shape.
    """
    try:
        tree = _parser().parse(text)
    except UnexpectedInput as e:
        _syntax_error(text, e)

    decl: _Declaration = _DeclarationBuilder().transform(tree)
    kind, base_name = _resolve_base(text, decl)

    extent = None
    if decl.extent is not None:
        extent = _parse_extent(str(decl.extent))
        if extent <= 0:
            raise_declaration_error("CT0005", text, decl.extent.column, extent=extent)
        if kind is PrimitiveKind.VOID and not decl.pointers:
            raise_declaration_error("CT0006", text, decl.extent.column)

    ctype = CType(kind, const=decl.const, pointers=decl.pointers, extent=extent, base_name=base_name)
    return decl.name, ctype


def declare(text: str, address: Optional[int] = None, footprint: Optional[int] = None,
            name: Optional[str] = None) -> CValue:
    """Build a ``CValue`` from a declaration such as ``"short buf[8]"``.

    The display name is ``name`` if given, else the declared identifier.
    """
    decl_name, ctype = parse_ctype(text)
    return CValue(ctype, name=name or decl_name or ANONYMOUS, address=address, footprint=footprint)
