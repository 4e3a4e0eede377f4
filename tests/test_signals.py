import os
import signal
import sys

import pytest

from minishell.signals import (
    SIG_REAL,
    SIG_VIRTUAL_CTRL_D,
    SIGNAL_COUNT,
    SignalAction,
    SignalType,
    ctrl_d_handler,
    describe_child_status,
    register_signal,
    setup_sig_handler,
    signal_actions,
)


@pytest.fixture(autouse=True)
def restore_signals():
    saved = {
        signum: signal.getsignal(signum)
        for signum in (signal.SIGINT, signal.SIGQUIT, signal.SIGCHLD)
    }
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)


def _child_status(code):
    pid = os.posix_spawn(sys.executable, [sys.executable, "-c", code], dict(os.environ))
    _, status = os.waitpid(pid, 0)
    return pid, status


def test_actions_in_order():
    actions = signal_actions()
    assert len(actions) == SIGNAL_COUNT
    assert [a.description for a in actions] == [
        "Ctrl-C Handler",
        "Ctrl-\\ Handler",
        "Child exit Handler",
        "Ctrl-D Handler",
    ]
    assert [a.type for a in actions] == [SignalType.REAL] * 3 + [SignalType.FAKE]
    assert actions[0].signum == signal.SIGINT
    assert actions[1].handler == signal.SIG_IGN
    assert actions[2].signum == signal.SIGCHLD
    assert actions[3].id == SIG_VIRTUAL_CTRL_D


def test_register_quit_ignores():
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)
    quit_action = signal_actions()[1]
    register_signal(quit_action)
    assert signal.getsignal(signal.SIGQUIT) == quit_action.handler


def test_register_invalid_signal_raises():
    action = SignalAction("Broken", SignalType.REAL, 0, SIG_REAL, handler=signal.SIG_IGN)
    with pytest.raises(OSError, match="Broken"):
        register_signal(action)


def test_setup_real_installs_handlers():
    setup_sig_handler(SIG_REAL)
    actions = signal_actions()
    assert signal.getsignal(signal.SIGINT) == actions[0].handler
    assert signal.getsignal(signal.SIGQUIT) == signal.SIG_IGN
    assert signal.getsignal(signal.SIGCHLD) == actions[2].handler


def test_setup_virtual_exits(capsys):
    with pytest.raises(SystemExit) as info:
        setup_sig_handler(SIG_VIRTUAL_CTRL_D)
    assert info.value.code == 0
    assert capsys.readouterr().out == "Signal recognized\nexit\n"


def test_ctrl_d_handler(capsys):
    with pytest.raises(SystemExit) as info:
        ctrl_d_handler()
    assert info.value.code == 0
    assert capsys.readouterr().out.endswith("exit\n")


def test_sigint_handler_writes_newline(capsys):
    signal_actions()[0].handler(signal.SIGINT, None)
    assert capsys.readouterr().out == "\n"


def test_describe_exited_child():
    pid, status = _child_status("import sys; sys.exit(3)")
    message = describe_child_status(int(signal.SIGCHLD), pid, status)
    assert message == f"signal:[{int(signal.SIGCHLD)}] child PID:[{pid}] exit code 3"


def test_describe_killed_child():
    pid, status = _child_status("import os, signal; os.kill(os.getpid(), signal.SIGKILL)")
    message = describe_child_status(17, pid, status)
    assert message == f"signal:[17] child PID:[{pid}] kill signal {int(signal.SIGKILL)}"


def test_describe_no_child():
    assert describe_child_status(17, 0, 0) == "signal:[17] received but no exited child"
    assert describe_child_status(17, -1, 0) == "signal:[17] received but no exited child"