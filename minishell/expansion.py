"""Variable and wildcard expansion of parsed command lines."""

from __future__ import annotations

import functools
import os
import re
from collections.abc import Iterable

from minishell.environment import Environment
from minishell.syntax import REDIRECTIONS, Node, NodeType

__all__ = [
    "MAX_MATCHES",
    "MAX_ARGS",
    "expand_variables",
    "expand_double_quoted",
    "match_wildcard",
    "expand_wildcards",
    "expand_ast",
]

MAX_MATCHES = 99
MAX_ARGS = 999

_VARIABLE = re.compile(r"\$([A-Za-z0-9_]+)")
_QUOTED_VARIABLE = re.compile(r"\$(\$|\?|[A-Za-z0-9_]*)")


def expand_variables(text: str, env: Environment) -> str:
    """Replace each ``$NAME`` in ``text`` with its value.

    A name is a run of ASCII letters, digits and underscores; an unset
    name expands to nothing.  A ``$`` not followed by a name character
    is kept as it is.
    """
    return _VARIABLE.sub(lambda match: env.get(match.group(1)) or "", text)


def expand_double_quoted(text: str, env: Environment) -> str:
    """Expand the contents of a double-quoted block.

    ``$$`` becomes the shell's process id, ``$?`` the last exit code and
    ``$NAME`` the value of the variable; unset names, and a ``$`` with
    no name after it, expand to nothing.
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name == "$":
            return str(env.shell_pid)
        if name == "?":
            return str(env.last_exit_code)
        return env.get(name) or ""

    return _QUOTED_VARIABLE.sub(replace, text)


def match_wildcard(pattern: str, name: str) -> bool:
    """Tell whether ``name`` matches ``pattern``.

    ``*`` matches any run of characters and ``?`` any single one.  A
    pattern ending in a lone ``*`` matches whatever is left, including
    nothing.
    """
    last = len(pattern) - 1

    @functools.lru_cache(maxsize=None)
    def match(p: int, s: int) -> bool:
        if p == len(pattern) and s == len(name):
            return True
        if p == last and pattern[p] == "*":
            return True
        if p == len(pattern) or s == len(name):
            return False
        if pattern[p] == "*":
            return match(p + 1, s) or match(p, s + 1)
        if pattern[p] in ("?", name[s]):
            return match(p + 1, s + 1)
        return False

    return match(0, 0)


def _directory_matches(pattern: str, directory: str | os.PathLike[str]) -> list[str]:
    try:
        entries = sorted(os.listdir(directory))
    except OSError:
        return []
    matches = (entry for entry in entries if match_wildcard(pattern, entry))
    return [entry for _, entry in zip(range(MAX_MATCHES), matches)]


def expand_wildcards(
    args: Iterable[str], directory: str | os.PathLike[str] = "."
) -> list[str]:
    """Replace each argument holding ``*`` or ``?`` with the matching names.

    Names are looked up in ``directory`` and taken in sorted order, at
    most ``MAX_MATCHES`` per argument and ``MAX_ARGS`` in all.  An
    argument that matches nothing is kept as it is.
    """
    expanded: list[str] = []
    for arg in args:
        matches = (
            _directory_matches(arg, directory) if "*" in arg or "?" in arg else []
        )
        if matches:
            room = max(0, MAX_ARGS - len(expanded))
            expanded.extend(matches[:room])
        else:
            expanded.append(arg)
    return expanded


def _expand(node: Node | None, env: Environment) -> None:
    if node is None:
        return
    if node.type is NodeType.CMD:
        if node.args is not None:
            node.args = expand_wildcards(expand_variables(arg, env) for arg in node.args)
    elif node.type in REDIRECTIONS:
        if node.args:
            node.args[0] = expand_variables(node.args[0], env)
        _expand(node.right, env)
    else:
        _expand(node.left, env)
        _expand(node.right, env)


def expand_ast(root: Node | None, env: Environment) -> Node | None:
    """Expand variables and wildcards throughout a tree, in place.

    Command words get both expansions, wildcards against the current
    directory; redirection targets get variable expansion only.
    Returns ``root``.
    """
    _expand(root, env)
    return root