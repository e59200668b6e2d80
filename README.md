# minish

`minish` is the parsing front end of a small interactive shell. It takes a
command line as a user types it and turns it into a list of commands, each
with its arguments and its redirections.

What it does with a line:

- **Lexing** (`minish.tokens`): puts spaces around unquoted runs of `|`, `<`
  and `>`, splits on unquoted spaces and tabs, and gives each word a
  `TokenType` (`PIPE`, `HEREDOC`, `APPEND`, `IN`, `OUT`, `WORD`, and
  `DELIMITER` for the word after `<<`). `tokenize_line` does all of this.
- **Syntax checks** (`minish.syntax`): `first_syntax_check` rejects unclosed
  quotes, a leading pipe, a line ending in `|` or `<`, `|||` or `| |`, and
  malformed redirections; `check_tokens` rejects a redirection that is not
  followed by a valid operand. Both raise `ShellSyntaxError`, whose
  `exit_status` is 258.
- **Expansion** (`minish.expansion`): `expand_tokens` replaces a leading `~`
  or `~/` with `HOME`, and expands `$NAME`, `$?` (the last exit status),
  `$0` (`bash`), `$-` (`himBH`) and `$<digit>` (empty). `$$` is kept as is.
  Single quotes stop expansion, double quotes allow it, and quote characters
  are removed. Unquoted expanded values have runs of spaces squeezed
  (`remove_var_spaces`). `$?` in a token after a pipe expands to `0`.
- **Commands** (`minish.commands`): `build_commands` splits the tokens at
  pipes into `Command` objects. Each has `argv` and `files`, a `Files`
  holding `infiles`, `outfiles`, `appendfiles`, `delimiters`, `allfiles`
  (every redirection in order) and `ambiguous` (positions in `allfiles` whose
  name came from an unquoted variable that was empty or held blanks).
- **Here-documents** (`minish.heredoc`): `run_heredocs` reads the body of
  every `<<` through a `read_line(prompt)` callable, with prompt `» `,
  until the delimiter line or end of input. Lines are expanded unless the
  delimiter was quoted. Each body is written to `_<delimiter>` in the
  temporary directory (or a directory you pass); only the last here-document
  of each command is kept, and the kept paths are returned.

## Installation

```
pip install .
```

No runtime dependencies. Python 3.10 or newer.

## Usage

Start the interactive loop:

```
minish
```

It runs only while standard input is a terminal. The prompt is
`Minishell -> `. Each line is checked and parsed; a syntax error is printed
and the exit status becomes 258. Ctrl-C gives a fresh prompt and sets the
exit status to 1. Ctrl-D prints `exit` and stops.

As a library:

```python
from minish.environment import Environment, ShellState
from minish.shell import parse_line

state = ShellState(Environment.from_envp(["HOME=/home/user", "USER=user"]))
commands = parse_line('echo "$USER" | cat > out.txt', state, input)
for command in commands:
    print(command.argv, command.files.outfiles)
# ['echo', 'user'] []
# ['cat'] ['out.txt']
```

`parse_line` returns an empty list for a blank line. `minish.shell.repl`
is a generator that yields the commands of each line read, for use with your
own `read_line` and `write` callables.

`Environment` keeps variables in order; `get` returns an empty string for an
unknown or valueless name, `set` adds or replaces, and `to_envp` renders
`NAME=VALUE` strings. `ShellState` holds an `Environment` and `exit_status`.

## What it does not do

`minish` parses commands but does not run them: there is no execution of
programs, no pipes or file redirections are set up, and there are no
built-in commands such as `cd`, `echo`, `export` or `exit`. The `minish`
command reads and parses lines and discards the result. There is no command
history.

## Running the tests

```
pip install .[test]
pytest
```