"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from ctraits.allocation import AllocationMethod, allocated_info
from ctraits.ctype import CValue
from ctraits.declarations import declare
from ctraits.errors import ERR, DeclarationError, emit
from ctraits.formatting import describe, printtype
from ctraits.kinds import POINTER_SIZE
from ctraits.probe import AllocatorProbe, FixedProbe, NullProbe
from ctraits.report import Reporter

# Stands in for the address of a declared value when --usable-size is given.
SYNTHETIC_ADDRESS = 0x1000


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ctraits",
        description="Classify C declarations and show their allocation records",
    )
    ap.add_argument("declarations", nargs="*", metavar="DECL",
                    help="C declaration or type name, e.g. 'const int ** const p' or 'short buf[8]'")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--record", action="store_true",
                    help="Also build the allocation record of each declaration")
    ap.add_argument("--usable-size", type=int, metavar="BYTES",
                    help="Treat each value as a heap allocation with this usable size (implies --record)")
    ap.add_argument("--json", action="store_true", help="Print results as JSON")
    ap.add_argument("--no-color", action="store_true", help="Disable colored diagnostics")
    return ap


def _record_warnings(reporter: Reporter, value: CValue, record, text: str) -> None:
    if (value.ctype.is_array and value.size == POINTER_SIZE
            and record.method is AllocationMethod.DYNAMIC):
        emit(reporter, ERR.CT0200, None, text, name=value.name, size=value.size, method=record.method)
    elif record.method is AllocationMethod.DYNAMIC:
        emit(reporter, ERR.CT0201, None, text, name=value.name)


def _print_facts(facts: dict, record) -> None:
    print(f"  kind:             {facts['kind']}")
    print(f"  pointer depth:    {facts['pointer_depth']}")
    print(f"  const:            {str(facts['is_const']).lower()}")
    print(f"  const pointer:    {str(facts['is_const_pointer']).lower()}")
    print(f"  element size:     {facts['element_size']}")
    if record is not None:
        print(f"  method:           {record.method}")
        print(f"  type size:        {record.typesize}")
        print(f"  total size:       {record.totalsize}")
        print(f"  array size:       {record.arraysize}")


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point.

    Returns:
        0 on success, 1 when only warnings were reported, 2 on errors.
    """
    ap = _build_parser()
    args = ap.parse_args(argv)
    if args.usable_size is not None and args.usable_size < 0:
        ap.error("--usable-size must not be negative")

    if args.version:
        from ctraits.version import print_banner
        print_banner()
        return 0

    if not args.declarations:
        ap.print_usage(sys.stderr)
        return 2

    want_record = args.record or args.usable_size is not None
    probe: AllocatorProbe = NullProbe()
    address = None
    if args.usable_size is not None:
        address = SYNTHETIC_ADDRESS
        probe = FixedProbe({SYNTHETIC_ADDRESS: args.usable_size})

    reporter = Reporter()
    results = []
    for text in args.declarations:
        try:
            value = declare(text, address=address)
        except DeclarationError as e:
            reporter.error(e.code, e.message, e.span, e.text)
            continue

        facts = describe(value)
        if not facts["supported"]:
            emit(reporter, ERR.CT0100, None, text, name=value.name, ctype=value.ctype)

        record = allocated_info(value, probe) if want_record else None
        if record is not None:
            _record_warnings(reporter, value, record, text)

        if args.json:
            entry = dict(facts)
            if record is not None:
                entry["record"] = record.to_dict()
            results.append(entry)
        else:
            printtype(value)
            _print_facts(facts, record)

    if args.json:
        print(json.dumps(results, indent=2))

    reporter.print(use_color=False if args.no_color else None)

    if reporter.has_errors:
        return 2
    if reporter.has_warnings:
        return 1
    return 0


def run() -> None:
    sys.exit(main(sys.argv[1:]))
