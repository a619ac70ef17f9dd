"""Terminal set-up and the start-up prompts."""

from __future__ import annotations

import subprocess
import sys
from typing import Callable, Optional, TextIO

TERMINAL_HEIGHT = 36
TERMINAL_WIDTH = 72

SUPPORTED_SYMBOLS = ("ES", "NQ")
SUPPORTED_EXPIRIES = ("20241220", "20250321")


class GatewayError(RuntimeError):
    """Raised when the default gateway cannot be found."""


def resize_terminal(rows: int, columns: int) -> None:
    """Ask the terminal to resize itself to the given rows and columns."""
    sys.stdout.write(f"\033[8;{rows};{columns}t")
    sys.stdout.flush()


def parse_default_gateway(route_output: str) -> str:
    """Return the address after the first ``via`` in routing table output."""
    words = iter(route_output.split())
    for word in words:
        if word == "via":
            gateway = next(words, "")
            if gateway:
                return gateway
            break
    raise GatewayError("Default gateway not found")


def get_default_gateway() -> str:
    """Find the default gateway by reading the system routing table."""
    try:
        result = subprocess.run(["ip", "route"], capture_output=True, text=True, check=False)
    except OSError as exc:
        raise GatewayError("Failed to execute command") from exc
    if result.returncode != 0:
        raise GatewayError("Command execution failed")
    gateway = parse_default_gateway(result.stdout)
    sys.stdout.write(f"Using default gateway: {gateway}\n")
    return gateway


def _prompt(
    title: str,
    prompt: str,
    invalid: str,
    choices: tuple[str, ...],
    normalise: Callable[[str], str],
    read_line: Optional[Callable[[], str]],
    out: Optional[TextIO],
    err: Optional[TextIO],
) -> str:
    read_line = read_line or input
    out = out or sys.stdout
    err = err or sys.stderr
    while True:
        out.write(title + "".join(f"{choice}, " for choice in sorted(choices)) + "\n")
        out.write(prompt)
        out.flush()
        answer = normalise(read_line().rstrip("\r\n"))
        if answer in choices:
            return answer
        err.write(invalid)


def prompt_symbol(read_line=None, out=None, err=None) -> str:
    """Ask until a supported symbol is entered; the answer is upper-cased."""
    return _prompt(
        "Supported symbols: ",
        "Enter symbol: ",
        "Invalid symbol\n",
        SUPPORTED_SYMBOLS,
        str.upper,
        read_line,
        out,
        err,
    )


def prompt_expiry(read_line=None, out=None, err=None) -> str:
    """Ask until a supported expiry date is entered."""
    return _prompt(
        "Supported expiries: ",
        "Enter expiry: ",
        "Invalid expiry\n",
        SUPPORTED_EXPIRIES,
        lambda text: text,
        read_line,
        out,
        err,
    )