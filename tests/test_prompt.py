from minishell.environment import Environment
from minishell.prompt import GREEN, RESET, get_prompt, transient_prompt


def _env(code, pwd=None):
    env = Environment(shell_pid=1, last_exit_code=code)
    if pwd is not None:
        env.set("PWD", pwd)
    return env


def test_prompt_success_shows_directory():
    prompt = get_prompt(_env(0, "/tmp/work"))
    assert "✅" in prompt
    assert "💀" not in prompt
    assert "/tmp/work" in prompt
    assert prompt.endswith("\033[0m\n╰─ ")


def test_prompt_failure_marker():
    prompt = get_prompt(_env(2, "/srv"))
    assert "💀" in prompt
    assert "✅" not in prompt
    assert prompt.startswith("╭─")


def test_prompt_without_pwd():
    prompt = get_prompt(_env(0))
    assert prompt.startswith("╭─")
    assert prompt.endswith(f"{GREEN}{RESET}\n╰─ ")


def test_prompt_directory_placement():
    prompt = get_prompt(_env(0, "/a/b"))
    assert prompt.endswith(f"{GREEN}/a/b{RESET}\n╰─ ")


def test_transient_prompt():
    text = transient_prompt("ls -l")
    assert text.startswith("\033[A\r\033[K\033[A\r\033[K")
    assert text.endswith("❯\033[0m ls -l\n")