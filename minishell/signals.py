"""Signal handling for the interactive shell."""

from __future__ import annotations

import enum
import os
import signal
import sys
from collections.abc import Callable
from dataclasses import dataclass
from types import FrameType
from typing import Union

__all__ = [
    "SIGNAL_COUNT",
    "SIG_REAL",
    "SIG_VIRTUAL_CTRL_D",
    "SignalType",
    "SignalAction",
    "signal_actions",
    "register_signal",
    "setup_sig_handler",
    "ctrl_d_handler",
    "describe_child_status",
]

SIGNAL_COUNT = 4
SIG_REAL = 0
SIG_VIRTUAL_CTRL_D = 1

Handler = Union[Callable[[int, Union[FrameType, None]], object], int, signal.Handlers, None]


class SignalType(enum.Enum):
    """Whether an action answers an operating-system signal or a shell event."""

    REAL = enum.auto()
    FAKE = enum.auto()


@dataclass(frozen=True)
class SignalAction:
    """How the shell reacts to one signal or virtual event.

    Real actions install ``handler`` for ``signum``; fake actions call
    ``virtual`` when the shell asks for the event numbered ``id``.
    """

    description: str
    type: SignalType
    signum: int
    id: int
    handler: Handler = None
    virtual: Callable[[], None] | None = None
    restart: bool = False


def _sigint_handler(signum: int, frame: FrameType | None) -> None:
    sys.stdout.write("\n")
    sys.stdout.flush()


def describe_child_status(signum: int, pid: int, status: int) -> str | None:
    """Describe how a child ended, given its wait status.

    Returns None when the status shows neither an exit nor a kill.
    """
    if pid <= 0:
        return f"signal:[{signum}] received but no exited child"
    if os.WIFEXITED(status):
        return f"signal:[{signum}] child PID:[{pid}] exit code {os.WEXITSTATUS(status)}"
    if os.WIFSIGNALED(status):
        return f"signal:[{signum}] child PID:[{pid}] kill signal {os.WTERMSIG(status)}"
    return None


def _peek_child() -> tuple[int, int]:
    """Look at an ended child without reaping it; pid 0 when there is none."""
    waitid = getattr(os, "waitid", None)
    nowait = getattr(os, "WNOWAIT", None)
    if waitid is None or nowait is None:
        return 0, 0
    try:
        result = waitid(os.P_ALL, 0, os.WEXITED | os.WNOHANG | nowait)
    except OSError:
        return 0, 0
    if result is None or result.si_pid <= 0:
        return 0, 0
    if result.si_code == getattr(os, "CLD_EXITED", 1):
        return result.si_pid, (result.si_status & 0xFF) << 8
    return result.si_pid, result.si_status & 0x7F


def _sigchld_handler(signum: int, frame: FrameType | None) -> None:
    pid, status = _peek_child()
    message = describe_child_status(signum, pid, status)
    if message is not None:
        print(message)


def ctrl_d_handler() -> None:
    """Answer end of input: announce it and leave the shell with status 0."""
    print("Signal recognized")
    print("exit")
    raise SystemExit(0)


def signal_actions() -> list[SignalAction]:
    """Return the shell's actions in the order they are set up."""
    return [
        SignalAction(
            "Ctrl-C Handler",
            SignalType.REAL,
            signal.SIGINT,
            SIG_REAL,
            handler=_sigint_handler,
            restart=True,
        ),
        SignalAction(
            "Ctrl-\\ Handler",
            SignalType.REAL,
            getattr(signal, "SIGQUIT", 0),
            SIG_REAL,
            handler=signal.SIG_IGN,
        ),
        SignalAction(
            "Child exit Handler",
            SignalType.REAL,
            getattr(signal, "SIGCHLD", 0),
            SIG_REAL,
            handler=_sigchld_handler,
            restart=True,
        ),
        SignalAction(
            "Ctrl-D Handler",
            SignalType.FAKE,
            0,
            SIG_VIRTUAL_CTRL_D,
            virtual=ctrl_d_handler,
        ),
    ]


def register_signal(action: SignalAction) -> None:
    """Install the handler of a real action.

    Raises OSError naming the action when the signal cannot be handled.
    """
    try:
        signal.signal(action.signum, action.handler)  # type: ignore[arg-type]
    except (OSError, ValueError, TypeError) as error:
        name = action.description or "register_signal"
        raise OSError(f"{name}: {error}") from error
    if action.restart and hasattr(signal, "siginterrupt"):
        signal.siginterrupt(action.signum, False)


def setup_sig_handler(id: int) -> None:
    """Install every real action and run the virtual action numbered ``id``.

    Actions are taken in order; running a virtual action ends the setup.
    """
    for action in signal_actions():
        if action.type is SignalType.REAL:
            try:
                register_signal(action)
            except OSError as error:
                print(error, file=sys.stderr)
                print(f"Registration of : {action.description} FAILED")
        elif action.id == id and action.virtual is not None:
            action.virtual()
            break