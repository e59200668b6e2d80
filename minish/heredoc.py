"""Here-document input collection."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Iterable

from minish.commands import Command, trim_name_quotes, trim_quotes
from minish.environment import ShellState
from minish.expansion import expand_word
from minish.tokens import TokenType

HEREDOC_PROMPT = "» "

ReadLine = Callable[[str], "str | None"]


def parse_delimiter(text: str) -> str:
    """Return the delimiter word with its quotes removed."""
    return trim_quotes(text)


def collect_heredoc(
    delimiter: str,
    read_line: ReadLine,
    state: ShellState,
    expand: bool = True,
) -> str:
    """Read lines until *delimiter* or end of input and return them joined.

    Each line keeps a trailing newline. With *expand* set, lines holding a
    ``$`` have their variables expanded. An interrupt sets the exit status
    to 1 and propagates.
    """
    lines: list[str] = []
    while True:
        try:
            line = read_line(HEREDOC_PROMPT)
        except KeyboardInterrupt:
            state.exit_status = 1
            raise
        if line is None or line == delimiter:
            break
        text = line + "\n"
        if expand and "$" in text:
            text = expand_word(text, state, None, heredoc=True)
        lines.append(text)
    return "".join(lines)


def _delimiter_is_quoted(raw: str) -> bool:
    return "'" in raw or '"' in raw


def _collect_for_command(
    command: Command,
    state: ShellState,
    read_line: ReadLine,
    directory: Path,
) -> Path | None:
    kept: Path | None = None
    delimiters = command.files.delimiters
    for position, raw in enumerate(delimiters):
        word = parse_delimiter(raw)
        text = collect_heredoc(word, read_line, state, not _delimiter_is_quoted(raw))
        path = directory / f"_{word}"
        path.write_text(text)
        if position == len(delimiters) - 1:
            kept = path
        else:
            path.unlink(missing_ok=True)
    return kept


def run_heredocs(
    commands: Iterable[Command],
    state: ShellState,
    read_line: ReadLine,
    directory: str | Path | None = None,
) -> list[Path]:
    """Collect every here-document of *commands* into files.

    Only the last here-document of each command is kept on disk; the
    paths of the kept files are returned. Delimiters are left unquoted.
    """
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    commands = list(commands)
    kept: list[Path] = []
    for command in commands:
        if command.files.delimiters:
            path = _collect_for_command(command, state, read_line, base)
            if path is not None:
                kept.append(path)
    for command in commands:
        command.files.delimiters = [
            trim_name_quotes(raw, TokenType.IN) for raw in command.files.delimiters
        ]
    return kept