"""Lexing of a command line into typed tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

SPECIAL_CHARS = "|<>"
BLANKS = " \t"


class TokenType(IntEnum):
    """Kinds of tokens produced by the lexer and refined by expansion."""

    PIPE = 1
    HEREDOC = 2
    APPEND = 3
    IN = 5
    OUT = 6
    VAR = 7
    NORMAL_VAR = 8
    WORD = 10
    DELIMITER = 12


@dataclass
class Token:
    """One word of a command line together with its kind."""

    content: str
    kind: TokenType


def check_quotes(state: int, char: str) -> int:
    """Return the quoting state after reading *char*.

    0 means unquoted, 1 inside single quotes, 2 inside double quotes.
    """
    if state == 0:
        if char == "'":
            return 1
        if char == '"':
            return 2
    elif state == 1 and char == "'":
        return 0
    elif state == 2 and char == '"':
        return 0
    return state


def is_special(char: str) -> bool:
    """Tell whether *char* is one of the operator characters ``| < >``."""
    return len(char) == 1 and char in SPECIAL_CHARS


def is_blank(text: str) -> bool:
    """Tell whether *text* holds nothing but spaces and tabs."""
    return all(char in BLANKS for char in text)


def contains_spaces(text: str) -> bool:
    """Tell whether *text* holds a space or a tab."""
    return any(char in BLANKS for char in text)


def add_spaces(line: str) -> str:
    """Surround each unquoted run of an operator character with spaces."""
    out: list[str] = []
    state = 0
    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        state = check_quotes(state, char)
        if state == 0 and is_special(char):
            end = i
            while end < length and line[end] == char:
                end += 1
            out.append(" " + line[i:end])
            if end < length:
                out.append(" ")
            i = end
        else:
            out.append(char)
            i += 1
    return "".join(out)


def split_words(line: str) -> list[str]:
    """Split *line* on spaces and tabs that are not inside quotes."""
    words: list[str] = []
    current: list[str] = []
    state = 0
    for char in line:
        state = check_quotes(state, char)
        if state == 0 and char in BLANKS:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        words.append("".join(current))
    return words


def _kind_of(word: str, previous: Token | None) -> TokenType:
    if word.startswith("|"):
        return TokenType.PIPE
    if word.startswith("<<"):
        return TokenType.HEREDOC
    if word.startswith("<"):
        return TokenType.IN
    if word.startswith(">>"):
        return TokenType.APPEND
    if word.startswith(">"):
        return TokenType.OUT
    if previous is not None and previous.kind is TokenType.HEREDOC:
        return TokenType.DELIMITER
    return TokenType.WORD


def tokenize(words: Iterable[str]) -> list[Token]:
    """Give each word its token kind."""
    tokens: list[Token] = []
    for word in words:
        previous = tokens[-1] if tokens else None
        tokens.append(Token(word, _kind_of(word, previous)))
    return tokens


def tokenize_line(line: str) -> list[Token]:
    """Lex a raw command line into tokens."""
    return tokenize(split_words(add_spaces(line)))


def pipe_before(tokens: Sequence[Token], index: int) -> bool:
    """Tell whether a pipe occurs at or before position *index*."""
    if not 0 <= index < len(tokens):
        raise IndexError(f"token index out of range: {index}")
    return any(token.kind is TokenType.PIPE for token in tokens[: index + 1])