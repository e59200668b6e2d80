"""Interactive loop: read, check, lex, expand and group command lines."""

from __future__ import annotations

import os
import signal
import sys
from typing import Callable, Iterator

from minish.commands import Command, build_commands
from minish.environment import Environment, ShellState
from minish.expansion import expand_tokens
from minish.heredoc import ReadLine, run_heredocs
from minish.syntax import ShellSyntaxError, check_tokens, first_syntax_check
from minish.tokens import is_blank, tokenize_line

PROMPT = "Minishell -> "


def _prompt_input(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def parse_line(
    line: str,
    state: ShellState,
    read_line: ReadLine = _prompt_input,
) -> list[Command]:
    """Turn one command line into commands, reading any here-documents.

    A syntax error sets the exit status to 258 and is raised again.
    """
    if is_blank(line):
        return []
    try:
        first_syntax_check(line)
        tokens = check_tokens(tokenize_line(line))
    except ShellSyntaxError:
        state.exit_status = ShellSyntaxError.exit_status
        raise
    expand_tokens(tokens, state)
    commands = build_commands(tokens)
    run_heredocs(commands, state, read_line)
    return commands


def repl(
    state: ShellState,
    read_line: ReadLine,
    write: Callable[[str], object],
) -> Iterator[list[Command]]:
    """Read lines until end of input, yielding the commands of each one."""
    while True:
        try:
            line = read_line(PROMPT)
        except KeyboardInterrupt:
            write("\n")
            state.exit_status = 1
            continue
        if line is None:
            write("exit\n")
            return
        if is_blank(line):
            continue
        try:
            commands = parse_line(line, state, read_line)
        except ShellSyntaxError as error:
            write(f"{error}\n")
            continue
        except KeyboardInterrupt:
            write("\n")
            state.exit_status = 1
            continue
        if commands:
            yield commands


def main(argv: list[str] | None = None) -> int:
    """Run the shell on standard input while it is a terminal."""
    state = ShellState(Environment(dict(os.environ)))
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    if not sys.stdin.isatty():
        return 0

    def write(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    for _ in repl(state, _prompt_input, write):
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())