"""The interactive prompt."""

from __future__ import annotations

from minishell.environment import Environment

__all__ = [
    "PURPLE",
    "GREEN",
    "RED",
    "GREY",
    "YELLOW",
    "BLUE",
    "RESET",
    "BOLD",
    "CLEAR",
    "get_prompt",
    "transient_prompt",
]

PURPLE = "\033[38;5;141m"
GREEN = "\033[38;5;46m"
RED = "\033[0;31m"
GREY = "\033[38;5;240m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
RESET = "\033[0m"
BOLD = "\033[1m"
CLEAR = "\r\033[K"

_UP_AND_CLEAR = "\033[A" + CLEAR

_SUCCESS_PREFIX = f"╭─{GREEN}{RESET}✅{GREEN}{RESET}─{GREEN}"
_FAILURE_PREFIX = f"╭─{RED}{RESET}💀{RED}{RESET}─{GREEN}"
_SUFFIX = f"{RESET}\n╰─ "


def get_prompt(env: Environment) -> str:
    """Build the two-line prompt showing the status and working directory."""
    prefix = _SUCCESS_PREFIX if env.last_exit_code == 0 else _FAILURE_PREFIX
    cwd = env.get("PWD") or ""
    return f"{prefix}{cwd}{_SUFFIX}"


def transient_prompt(command: str) -> str:
    """Return the text that replaces the prompt with a compact echo of ``command``."""
    return f"{_UP_AND_CLEAR}{_UP_AND_CLEAR}{GREEN}❯{RESET} {command}\n"