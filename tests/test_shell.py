import signal
import sys

import pytest

from minishell.environment import Environment
from minishell.shell import main, run_line

PY = sys.executable


@pytest.fixture(autouse=True)
def restore_signals():
    saved = {
        signum: signal.getsignal(signum)
        for signum in (signal.SIGINT, signal.SIGQUIT, signal.SIGCHLD)
    }
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)


@pytest.fixture
def env():
    return Environment(shell_pid=1234)


def test_status_is_returned_and_stored(env, capsys):
    status = run_line(env, f"{PY} -c 'import sys; sys.exit(3)'")
    assert status == 3
    assert env.last_exit_code == 3
    out = capsys.readouterr().out
    assert "=== AST Debug Output ===" in out
    assert out.endswith("Command return value: 3\n")


def test_or_runs_right_after_failure(env):
    line = f"{PY} -c 'raise SystemExit(1)' || {PY} -c 'raise SystemExit(4)'"
    assert run_line(env, line) == 4


def test_and_stops_after_failure(env):
    line = f"{PY} -c 'raise SystemExit(1)' && {PY} -c 'raise SystemExit(4)'"
    assert run_line(env, line) == 1


def test_syntax_error_reports_and_counts_as_zero(env, capsys):
    env.last_exit_code = 7
    assert run_line(env, "( echo") == 0
    out = capsys.readouterr().out
    assert "Syntax error: expected closing ')'" in out
    assert env.last_exit_code == 0


def test_output_redirection(env, tmp_path):
    target = tmp_path / "out.txt"
    assert run_line(env, f"{PY} -c 'print(42)' > {target}") == 0
    assert target.read_text() == "42\n"


def test_variables_are_expanded(env, tmp_path):
    target = tmp_path / "greeting.txt"
    env.set("GREETING", "hello")
    code = "import sys; open(sys.argv[1], 'w').write(sys.argv[2])".replace("'", '"')
    assert run_line(env, f"{PY} -c '{code}' {target} $GREETING") == 0
    assert target.read_text() == "hello"


def test_main_exit(monkeypatch):
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        return "exit"

    monkeypatch.setattr("builtins.input", fake_input)
    assert main([]) == 0
    assert len(prompts) == 1
    assert prompts[0].endswith("╰─ ")


def test_main_runs_commands(monkeypatch, capsys):
    lines = iter([f"{PY} -c 'import sys; sys.exit(5)'", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main([]) == 0
    assert "Command return value: 5" in capsys.readouterr().out


def test_main_end_of_input(monkeypatch, capsys):
    def no_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", no_input)
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 0
    assert capsys.readouterr().out.endswith("Signal recognized\nexit\n")