"""OSC-8 hyperlink utilities for the BIBLION CLI.

Detects whether the active text stream is likely to render OSC-8 terminal
hyperlinks and renders a URL accordingly, falling back to plain text.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINAL_PROGRAMS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Args:
        stream: File-like text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: ``True`` if hyperlinks should be emitted; ``False`` otherwise.

    Notes:
        - Returns ``False`` when the stream is not a TTY (piped or redirected).
        - Relies on an allowlist of terminal identifiers and environment hints.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in OSC8_TERMINAL_PROGRAMS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Return an OSC-8 hyperlink, or the bare URL on unsupported terminals.

    Args:
        url: Target URL.
        label: Visible text; defaults to the URL itself.
    """
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{label or url}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
