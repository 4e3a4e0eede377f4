"""The interactive shell loop."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from minishell.environment import Environment, init_env
from minishell.executor import Executor
from minishell.expansion import expand_ast
from minishell.prompt import get_prompt, transient_prompt
from minishell.signals import SIG_REAL, SIG_VIRTUAL_CTRL_D, setup_sig_handler
from minishell.syntax import ShellSyntaxError, debug_ast, parse
from minishell.tokenizer import tokenize

__all__ = ["run_line", "main"]


def run_line(env: Environment, line: str) -> int:
    """Parse, expand and run one command line; return its status.

    A syntax error is reported and leaves nothing to run, which counts
    as status 0.  The status is stored as the environment's last exit
    code.
    """
    try:
        root = parse(tokenize(line))
    except ShellSyntaxError as error:
        print(f"Syntax error: {error}")
        root = None
    debug_ast(root)
    expand_ast(root, env)
    status = Executor(env).execute(root)
    env.last_exit_code = status
    print(f"Command return value: {status}")
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive shell until ``exit`` or end of input."""
    try:
        import readline  # noqa: F401  (line editing and history for input())
    except ImportError:
        pass
    env = init_env(f"{key}={value}" for key, value in os.environ.items())
    setup_sig_handler(SIG_REAL)
    while True:
        try:
            line = input(get_prompt(env))
        except EOFError:
            setup_sig_handler(SIG_VIRTUAL_CTRL_D)
            return 0
        if line == "exit":
            break
        sys.stdout.write(transient_prompt(line))
        run_line(env, line)
    return 0


if __name__ == "__main__":
    sys.exit(main())