"""Lexical analysis of a shell command line."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ["TokenType", "Token", "tokenize"]


class TokenType(enum.Enum):
    """Kinds of token produced by :func:`tokenize`."""

    CMD = enum.auto()
    PIPE = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    REDIR_APPEND = enum.auto()
    HEREDOC = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    GROUP_OPEN = enum.auto()
    GROUP_CLOSE = enum.auto()
    WORD = enum.auto()
    EOF = enum.auto()
    SGQ_BLOCK = enum.auto()
    DBQ_BLOCK = enum.auto()


@dataclass(frozen=True)
class Token:
    """A single lexical token and the text it was made from."""

    type: TokenType
    value: str


_SPACE = frozenset(" \t\n\v\f\r")
_WORD_STOP = _SPACE | {"|", "<", ">", ")"}

# character -> (type when doubled, type when single)
_OPERATORS = {
    "|": (TokenType.OR, TokenType.PIPE),
    "&": (TokenType.AND, TokenType.AND),
    "<": (TokenType.HEREDOC, TokenType.REDIR_IN),
    ">": (TokenType.REDIR_APPEND, TokenType.REDIR_OUT),
}

_QUOTES = {
    "'": TokenType.SGQ_BLOCK,
    '"': TokenType.DBQ_BLOCK,
}

_GROUPS = {
    "(": TokenType.GROUP_OPEN,
    ")": TokenType.GROUP_CLOSE,
}


def tokenize(text: str) -> list[Token]:
    """Split a command line into a list of tokens.

    Quoted blocks become a single token holding the text between the
    quotes; an unterminated quote runs to the end of the line.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char in _OPERATORS:
            doubled, single = _OPERATORS[char]
            if text.startswith(char * 2, pos):
                tokens.append(Token(doubled, char * 2))
                pos += 2
            else:
                tokens.append(Token(single, char))
                pos += 1
        elif char in _QUOTES:
            end = text.find(char, pos + 1)
            if end < 0:
                end = length
            tokens.append(Token(_QUOTES[char], text[pos + 1:end]))
            pos = end + 1
        elif char in _GROUPS:
            tokens.append(Token(_GROUPS[char], char))
            pos += 1
        elif char in _SPACE:
            pos += 1
        else:
            end = pos
            while end < length and text[end] not in _WORD_STOP:
                end += 1
            tokens.append(Token(TokenType.WORD, text[pos:end]))
            pos = end
    return tokens