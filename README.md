# minishell

A small interactive shell. It reads a line, splits it into tokens, builds a
syntax tree, expands variables and wildcards, and runs the tree. The prompt has
two lines: the first shows a mark for the last exit status (✅ or 💀) and the
value of `PWD`, the second is where you type.

## Installing

```
pip install .
```

## Running

```
minishell
```

Type `exit` to leave. Ctrl-D at the prompt prints `Signal recognized` and
`exit`, then ends the session with status 0. Ctrl-C writes a new line without
leaving the shell, and Ctrl-\ is ignored.

After each line the shell prints a debug dump of the syntax tree and a line
`Command return value: N` with the line's exit status.

## What it understands

- Commands and arguments: `ls -l /tmp`
- Pipelines: `cat file | grep word | wc -l`
- Redirections: `< in`, `> out`, `>> out`, and here-documents with `<< END`,
  whose lines are read at a `> ` prompt until `END` or end of input
- Logical operators: `make && ./run`, `test -f x || echo missing`
- Grouping with parentheses: `(echo a && echo b) | wc -l`
- Quoted text: `'...'` and `"..."` make one word of everything between the
  quotes; an unclosed quote runs to the end of the line
- Environment variables: `$HOME` and the like, in command words and in
  redirection targets; an unset variable expands to nothing
- Wildcards `*` and `?` in command words, matched against the names in the
  current directory in sorted order (at most 99 names per word); a word that
  matches nothing is kept as written

`|` binds tighter than `&&` and `||`. Commands are looked up in the
directories listed in `PATH`, unless the name already contains a `/`. A
command that cannot be found gives status 127; a redirection whose file
cannot be opened gives status 1. A syntax error such as a missing `)` or a
missing file name after a redirection is reported as `Syntax error: ...` and
nothing is run.

## What it does not do

- There are no built-in commands apart from `exit`: no `cd`, `export`,
  `unset` or `echo` of its own. Every other command is started as a program.
- Variables cannot be set from the command line; the shell uses the
  environment it was started with.
- Quoting does not stop expansion: words in single quotes get the same
  variable and wildcard expansion as any other word. `$?` and `$$` are not
  expanded on the command line.
- There is no background execution or job control; a single `&` is read the
  same as `&&`.
- Words end only at whitespace, `|`, `<`, `>` and `)`, so `&&` and `(` need
  spaces around them when they follow a word.

## Using it from Python

The parts of the shell can be used on their own:

```python
from minishell.tokenizer import tokenize
from minishell.syntax import parse, format_ast

tree = parse(tokenize("ls -l | grep py > out.txt"))
print(format_ast(tree))
```

`parse` raises `minishell.syntax.ShellSyntaxError` on malformed input.

To run a line against an environment built from the current process:

```python
import os
from minishell.environment import init_env
from minishell.shell import run_line

env = init_env(f"{k}={v}" for k, v in os.environ.items())
status = run_line(env, "echo hello && echo world")
```

Other pieces:

- `minishell.environment.Environment` holds the variables (`get`, `set`,
  `to_envp`, `find_executable`) together with `last_exit_code` and
  `shell_pid`. `init_env` splits each entry on `=`, drops empty pieces and
  keeps the first two as key and value.
- `minishell.expansion` has `expand_variables`, `expand_double_quoted` (which
  also turns `$$` into the process id and `$?` into the last exit code),
  `match_wildcard`, `expand_wildcards` and `expand_ast`.
- `minishell.executor.Executor(env).execute(tree)` runs a tree and returns its
  status; `collect_heredoc` reads here-document lines from any line reader.
- `minishell.prompt.get_prompt(env)` builds the prompt text.

## Tests

```
pip install .[test]
pytest
```