"""Execution of syntax trees."""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from collections.abc import Callable

from minishell.environment import Environment
from minishell.syntax import Node, NodeType

__all__ = ["Executor", "collect_heredoc", "HEREDOC_PROMPT"]

HEREDOC_PROMPT = "> "

ReadLine = Callable[[str], "str | None"]

_OPEN_FLAGS = {
    NodeType.REDIR_IN: os.O_RDONLY,
    NodeType.REDIR_OUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    NodeType.REDIR_APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}


def collect_heredoc(delimiter: str, read_line: ReadLine = input) -> str:
    """Read lines until ``delimiter`` or end of input and return them.

    ``read_line`` is called with the prompt and returns a line, or None
    (or raises EOFError) at end of input.  Each collected line ends in a
    newline; the delimiter line itself is not included.
    """
    lines: list[str] = []
    while True:
        try:
            line = read_line(HEREDOC_PROMPT)
        except EOFError:
            break
        if line is None or line == delimiter:
            break
        lines.append(line + "\n")
    return "".join(lines)


class Executor:
    """Runs syntax trees against an environment.

    File descriptors of ``None`` stand for the shell's own standard
    input and output.
    """

    def __init__(self, env: Environment, read_line: ReadLine = input) -> None:
        self.env = env
        self.read_line = read_line
        self._handlers = {
            NodeType.CMD: self._command,
            NodeType.PIPE: self._pipeline,
            NodeType.REDIR_IN: self._redirection,
            NodeType.REDIR_OUT: self._redirection,
            NodeType.REDIR_APPEND: self._redirection,
            NodeType.HEREDOC: self._redirection,
            NodeType.AND: self._logical,
            NodeType.OR: self._logical,
            NodeType.GROUP: self._group,
        }

    def execute(self, root: Node | None) -> int:
        """Run a tree and return its exit status."""
        return self._run(root, None, None)

    def _run(self, node: Node | None, in_fd: int | None, out_fd: int | None) -> int:
        if node is None:
            return 0
        handler = self._handlers.get(node.type)
        if handler is None:
            print("Unknown node type in execution", file=sys.stderr)
            return 1
        return handler(node, in_fd, out_fd)

    def _child_env(self) -> dict[str, str]:
        return dict(entry.split("=", 1) for entry in self.env.to_envp())

    def _command(self, node: Node, in_fd: int | None, out_fd: int | None) -> int:
        if not node.args:
            return 0
        name = node.args[0]
        path = self.env.find_executable(name)
        if path is None:
            print(f"Command not found: {name}", file=sys.stderr)
            return 127
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            completed = subprocess.run(
                node.args,
                executable=path,
                stdin=in_fd,
                stdout=out_fd,
                env=self._child_env(),
                check=False,
            )
        except OSError:
            print(f"Command not found: {name}", file=sys.stderr)
            return 127
        return completed.returncode if completed.returncode >= 0 else 1

    def _pipeline(self, node: Node, in_fd: int | None, out_fd: int | None) -> int:
        try:
            read_fd, write_fd = os.pipe()
        except OSError as error:
            print(f"pipe: {error.strerror}", file=sys.stderr)
            return 1
        try:
            self._run(node.left, in_fd, write_fd)
        finally:
            os.close(write_fd)
        try:
            status = self._run(node.right, read_fd, out_fd)
        finally:
            os.close(read_fd)
        self.env.last_exit_code = status
        return status

    def _redirection(self, node: Node, in_fd: int | None, out_fd: int | None) -> int:
        target = node.args[0] if node.args else ""
        if node.type is NodeType.HEREDOC:
            text = collect_heredoc(target, self.read_line)
            with tempfile.TemporaryFile() as body:
                body.write(text.encode("utf-8"))
                body.flush()
                body.seek(0)
                return self._run(node.right, body.fileno(), out_fd)
        try:
            fd = os.open(target, _OPEN_FLAGS[node.type], 0o644)
        except OSError:
            return 1
        try:
            if node.type is NodeType.REDIR_IN:
                return self._run(node.right, fd, out_fd)
            return self._run(node.right, in_fd, fd)
        finally:
            os.close(fd)

    def _logical(self, node: Node, in_fd: int | None, out_fd: int | None) -> int:
        left = self._run(node.left, in_fd, out_fd)
        self.env.last_exit_code = left
        proceed = (left == 0) if node.type is NodeType.AND else (left != 0)
        if not proceed:
            return left
        right = self._run(node.right, in_fd, out_fd)
        self.env.last_exit_code = right
        return right

    def _group(self, node: Node, in_fd: int | None, out_fd: int | None) -> int:
        return self._run(node.left, in_fd, out_fd)