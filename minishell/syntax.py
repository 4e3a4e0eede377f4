"""Parsing of token lists into an abstract syntax tree."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from minishell.tokenizer import Token, TokenType

__all__ = [
    "NodeType",
    "Node",
    "ShellSyntaxError",
    "REDIRECTIONS",
    "parse",
    "format_ast",
    "debug_ast",
]


class NodeType(enum.Enum):
    """Kinds of node in the syntax tree."""

    CMD = enum.auto()
    PIPE = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    REDIR_APPEND = enum.auto()
    HEREDOC = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    GROUP = enum.auto()
    SGQ = enum.auto()
    DBQ = enum.auto()

    @property
    def label(self) -> str:
        """Name used in the debug dump."""
        return _LABELS.get(self, "UNKNOWN")


_LABELS = {
    NodeType.CMD: "CMD",
    NodeType.PIPE: "PIPE",
    NodeType.REDIR_IN: "REDIR_IN",
    NodeType.REDIR_OUT: "REDIR_OUT",
    NodeType.REDIR_APPEND: "APPEND",
    NodeType.HEREDOC: "HEREDOC",
    NodeType.AND: "AND",
    NodeType.OR: "OR",
    NodeType.GROUP: "GROUP",
}

REDIRECTIONS = frozenset(
    {NodeType.REDIR_IN, NodeType.REDIR_OUT, NodeType.REDIR_APPEND, NodeType.HEREDOC}
)

_REDIRECTION_TOKENS = {
    TokenType.REDIR_IN: NodeType.REDIR_IN,
    TokenType.REDIR_OUT: NodeType.REDIR_OUT,
    TokenType.REDIR_APPEND: NodeType.REDIR_APPEND,
    TokenType.HEREDOC: NodeType.HEREDOC,
}

_ARGUMENT_TOKENS = (TokenType.WORD, TokenType.SGQ_BLOCK, TokenType.DBQ_BLOCK)


class ShellSyntaxError(Exception):
    """Raised when a command line cannot be parsed."""


@dataclass
class Node:
    """A syntax tree node.

    Commands hold their words in ``args``; redirections hold the target
    file in ``args[0]`` and the redirected command in ``right``;
    operators hold their operands in ``left`` and ``right``; groups hold
    their body in ``left``.
    """

    type: NodeType
    args: list[str] | None = None
    left: Node | None = None
    right: Node | None = None


class _Parser:
    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._pos = 0

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _at(self, *kinds: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type in kinds

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def logical(self) -> Node:
        left = self.pipeline()
        while self._at(TokenType.AND, TokenType.OR):
            op = self._advance()
            kind = NodeType.AND if op.type is TokenType.AND else NodeType.OR
            right = self.pipeline()
            left = Node(kind, left=left, right=right)
        return left

    def pipeline(self) -> Node:
        left = self.group()
        while self._at(TokenType.PIPE):
            self._advance()
            right = self.group()
            left = Node(NodeType.PIPE, left=left, right=right)
        return left

    def group(self) -> Node:
        if not self._at(TokenType.GROUP_OPEN):
            return self.simple_command()
        self._advance()
        body = self.logical()
        if not self._at(TokenType.GROUP_CLOSE):
            raise ShellSyntaxError("expected closing ')'")
        self._advance()
        return Node(NodeType.GROUP, left=body)

    def simple_command(self) -> Node:
        args: list[str] = []
        while self._at(*_ARGUMENT_TOKENS):
            args.append(self._advance().value)
        command = Node(NodeType.CMD, args)
        while self._at(*_REDIRECTION_TOKENS):
            command = self.redirection(command)
        return command

    def redirection(self, command: Node) -> Node:
        op = self._advance()
        if not self._at(TokenType.WORD):
            raise ShellSyntaxError("expected filename after redirection")
        target = self._advance()
        return Node(_REDIRECTION_TOKENS[op.type], [target.value], right=command)


def parse(tokens: Iterable[Token]) -> Node:
    """Build a syntax tree from tokens.

    ``|`` binds tighter than ``&&`` and ``||``; both are left
    associative.  Tokens left over after a complete expression are
    ignored.
    """
    return _Parser(tokens).logical()


def _display(node: Node | None, depth: int) -> Iterator[str]:
    if node is None:
        return
    pad = "  " * depth
    inner = "  " * (depth + 1)
    yield f"{pad}Node: {node.type.label}\n"
    if node.type is NodeType.CMD and node.args is not None:
        words = "".join(f'"{arg}" ' for arg in node.args)
        yield f"{inner}Args: {words}\n"
    if node.type in REDIRECTIONS and node.args:
        yield f'{inner}File: "{node.args[0]}"\n'
    if node.left is not None:
        yield f"{pad}Left:\n"
        yield from _display(node.left, depth + 1)
    if node.right is not None:
        yield f"{pad}Right:\n"
        yield from _display(node.right, depth + 1)


def format_ast(root: Node | None) -> str:
    """Render a tree as the indented debug dump."""
    body = "".join(_display(root, 0))
    return f"=== AST Debug Output ===\n{body}=======================\n"


def debug_ast(root: Node | None) -> None:
    """Print the debug dump of a tree to standard output."""
    print(format_ast(root), end="")