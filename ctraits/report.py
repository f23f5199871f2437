from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from typing import List, Optional


class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    YELLOW = "\x1b[33m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    source: Optional[str] = None  # Declaration text the span points into


class Reporter:
    """Collects diagnostics about declarations and renders them for a terminal."""

    def __init__(self, label: str = "<decl>") -> None:
        self.label = label
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span], source: Optional[str] = None):
        self.items.append(Diagnostic("error", code, msg, span, source))

    def warn(self, code: str, msg: str, span: Optional[Span], source: Optional[str] = None):
        self.items.append(Diagnostic("warning", code, msg, span, source))

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.items)

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/guide/markers
        use_unicode → use │ / ╰ / ╯ and a separate caret line above the guide
        """
        out: List[str] = []

        for d in self.items:
            loc = f"{self.label}:{d.span.col}" if d.span else self.label
            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                kind = f"{C.BOLD}{C.RED}error{C.RESET}" if d.kind == "error" else f"{C.BOLD}{C.YELLOW}warning{C.RESET}"
                head = f"{C.CYAN}{loc}{C.RESET}: {kind} [{C.DIM}{d.code}{C.RESET}]: {message}"
            else:
                head = f"{loc}: {d.kind} [{d.code}]: {message}"

            if d.span is None or d.source is None:
                out.append(head)
                continue

            start = max(1, d.span.col)
            caret_color = C.RED if d.kind == "error" else C.YELLOW

            if use_unicode:
                gray = (lambda s: f"{C.GRAY}{s}{C.RESET}") if use_color else (lambda s: s)
                caret = " " * (start - 1) + "┯"
                if use_color:
                    caret = f"{caret_color}{caret}{C.RESET}"
                out.append(f"{gray('  ╭──┤ ')}{head}")
                out.append(f"{gray('  │')}  {d.source}")
                out.append(f"{gray('  │')}  {caret}")
                tail = f"{caret_color}╯{C.RESET}" if use_color else "╯"
                out.append(f"{gray('  ╰' + '─' * (start + 1))}{tail}")
            else:
                # ASCII fallback: header on top, then source and caret
                out.append(head)
                out.append(f"  | {d.source}")
                out.append(f"  ` {' ' * (start - 1)}^")

        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        Unicode prefixes (│ / ╰) are auto-enabled for TTY unless NO_UNICODE or TERM=dumb.
        """
        stream = stream or sys.stderr
        is_tty = getattr(stream, "isatty", lambda: False)()
        dumb = os.getenv("TERM") == "dumb"

        if use_color is None:
            use_color = bool(is_tty and os.getenv("NO_COLOR") is None and not dumb)
        if use_unicode is None:
            use_unicode = bool(is_tty and os.getenv("NO_UNICODE") is None and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
