"""Grouping of expanded tokens into commands with their redirections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from minish.tokens import Token, TokenType, check_quotes, is_blank

_OPERAND_KINDS = (TokenType.WORD, TokenType.VAR, TokenType.NORMAL_VAR)
_ARG_PREDECESSORS = _OPERAND_KINDS + (TokenType.DELIMITER,)
_REDIRECT_KINDS = (TokenType.IN, TokenType.OUT, TokenType.APPEND)


@dataclass
class Files:
    """Redirections of one command, in the order they appear."""

    infiles: list[str] = field(default_factory=list)
    outfiles: list[str] = field(default_factory=list)
    appendfiles: list[str] = field(default_factory=list)
    delimiters: list[str] = field(default_factory=list)
    allfiles: list[str] = field(default_factory=list)
    ambiguous: list[int] = field(default_factory=list)


@dataclass
class Command:
    """One simple command of a pipeline."""

    argv: list[str] = field(default_factory=list)
    files: Files = field(default_factory=Files)


def trim_quotes(text: str) -> str:
    """Remove the quote characters that open or close a quoted part."""
    out: list[str] = []
    state = 0
    for char in text:
        state = check_quotes(state, char)
        if (state != 2 and char == "'") or (state != 1 and char == '"'):
            continue
        out.append(char)
    return "".join(out)


def trim_name_quotes(text: str, kind: TokenType) -> str:
    """Remove quotes from a file name unless it came from an expansion."""
    if kind in (TokenType.VAR, TokenType.NORMAL_VAR):
        return text
    return trim_quotes(text)


def _segment(tokens: Sequence[Token]) -> Iterator[tuple[int, Token]]:
    """Yield the tokens up to the first pipe, with their positions."""
    for index, token in enumerate(tokens):
        if token.kind is TokenType.PIPE:
            return
        yield index, token


def _argument_words(token: Token) -> list[str]:
    content = token.content
    if token.kind is TokenType.NORMAL_VAR:
        if is_blank(content):
            return []
        if " " in content:
            return [piece for piece in content.split(" ") if piece]
        return [content]
    if token.kind is TokenType.VAR:
        return [content]
    if "'" in content or '"' in content:
        return [trim_quotes(content)]
    return [content]


def build_argv(tokens: Sequence[Token]) -> list[str]:
    """Collect the arguments of the command that starts at *tokens*."""
    argv: list[str] = []
    last = tokens[0] if tokens else None
    for _, token in _segment(tokens):
        if (
            token.kind in _OPERAND_KINDS
            and last is not None
            and last.kind in _ARG_PREDECESSORS
        ):
            argv.extend(_argument_words(token))
        last = token
    return argv


def build_files(tokens: Sequence[Token]) -> Files:
    """Collect the redirections of the command that starts at *tokens*."""
    files = Files()
    targets = {
        TokenType.IN: files.infiles,
        TokenType.OUT: files.outfiles,
        TokenType.APPEND: files.appendfiles,
    }
    for index, token in _segment(tokens):
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if token.kind is TokenType.DELIMITER:
            files.delimiters.append(token.content)
            files.allfiles.append(trim_name_quotes(token.content, TokenType.DELIMITER))
            continue
        if (
            token.kind in _REDIRECT_KINDS
            and following is not None
            and following.kind in _OPERAND_KINDS
        ):
            name = trim_name_quotes(following.content, following.kind)
            targets[token.kind].append(name)
            if following.kind is TokenType.NORMAL_VAR and (
                following.content == "" or any(c in " \t" for c in following.content)
            ):
                files.ambiguous.append(len(files.allfiles))
            files.allfiles.append(name)
    return files


def build_commands(tokens: Sequence[Token]) -> list[Command]:
    """Split a token list at its pipes into commands."""
    commands: list[Command] = []
    start = 0
    while start < len(tokens):
        part = tokens[start:]
        commands.append(Command(build_argv(part), build_files(part)))
        end = next(
            (i for i, token in enumerate(part) if token.kind is TokenType.PIPE),
            len(part),
        )
        start += end + 1
    return commands