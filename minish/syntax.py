"""Syntax checks on raw command lines and on token lists."""

from __future__ import annotations

from typing import Sequence

from minish.tokens import Token, TokenType, check_quotes, is_special

GENERIC_ERROR = "Minishell: Syntax Error!"
UNCLOSED_QUOTES = "Minishell: syntax_error, quotes not closed"
REDIRECT_ERROR = "mini_hell: Syntax Error!"

_DIGITS = "0123456789"
_REDIRECTS = "<>"


class ShellSyntaxError(Exception):
    """A command line that cannot be parsed."""

    exit_status = 258


def _at(line: str, index: int) -> str:
    return line[index] if 0 <= index < len(line) else ""


def _is_digit(char: str) -> bool:
    return char != "" and char in _DIGITS


def check_multi_pipes(line: str) -> bool:
    """Tell whether *line* holds ``|||`` or ``| |``."""
    return "|||" in line or "| |" in line


def in_out_check(line: str) -> str:
    """Reject malformed redirections; return *line* if it passes."""
    for i, char in enumerate(line):
        following = _at(line, i + 1)
        after = _at(line, i + 2)
        if char in _REDIRECTS:
            if following != char and is_special(following):
                raise ShellSyntaxError(GENERIC_ERROR)
            if following in (char, " ") and after == char:
                raise ShellSyntaxError(GENERIC_ERROR)
        if is_special(char) and following == "":
            raise ShellSyntaxError(REDIRECT_ERROR)
        if char in _REDIRECTS:
            end = i + 1
            while _is_digit(_at(line, end)):
                end += 1
            if end - i > 1 and _at(line, end) in ("<", ">"):
                raise ShellSyntaxError(REDIRECT_ERROR)
    return line


def first_syntax_check(line: str) -> str:
    """Check a raw line before lexing; return it unchanged if it passes."""
    state = 0
    for char in line:
        state = check_quotes(state, char)
    if state != 0:
        raise ShellSyntaxError(UNCLOSED_QUOTES)
    stripped = line.lstrip(" \t")
    if stripped.startswith("|"):
        raise ShellSyntaxError(GENERIC_ERROR)
    if stripped and is_special(stripped[-1]) and stripped[-1] != ">":
        raise ShellSyntaxError(GENERIC_ERROR)
    if check_multi_pipes(stripped):
        raise ShellSyntaxError(GENERIC_ERROR)
    in_out_check(stripped)
    return line


def check_tokens(tokens: Sequence[Token]) -> Sequence[Token]:
    """Check that every redirection is followed by a valid operand."""
    for token, following in zip(tokens, tokens[1:]):
        if token.kind is TokenType.HEREDOC:
            valid = following.kind is TokenType.DELIMITER
        elif token.kind in (TokenType.APPEND, TokenType.IN, TokenType.OUT):
            valid = following.kind is TokenType.WORD
        else:
            valid = True
        if not valid:
            raise ShellSyntaxError(
                f"minishell: Syntax Error! near unexpected token `{following.content}'"
            )
    return tokens