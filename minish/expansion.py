"""Expansion of variables, quotes and ``~`` inside tokens."""

from __future__ import annotations

from typing import MutableSequence

from minish.environment import ShellState
from minish.tokens import Token, TokenType, pipe_before

_ACCEPTED_AFTER_DOLLAR = ("$", "_", "?", "-", '"', "'")


def _is_alnum(char: str) -> bool:
    return len(char) == 1 and char.isascii() and char.isalnum()


def _is_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def remove_var_spaces(text: str) -> str:
    """Squeeze runs of spaces in an expanded value to single spaces.

    A leading blank and a trailing space are kept as one space each.
    """
    pieces = [piece for piece in text.split(" ") if piece]
    prefix = " " if text[:1] in (" ", "\t") else ""
    result = prefix + " ".join(pieces)
    if pieces and text.endswith(" "):
        result += " "
    return result


def expand_home(text: str, state: ShellState) -> str:
    """Replace a leading ``~`` or ``~/`` with the value of ``HOME``."""
    if text.startswith("~/"):
        return state.env.get("HOME") + "/" + text[2:]
    if text == "~":
        return state.env.get("HOME")
    return text


class _Scanner:
    """Walks one word and builds its expanded text."""

    def __init__(self, word: str, state: ShellState) -> None:
        self.word = word
        self.state = state
        self.pos = 0
        self.start = 0
        self.parts: list[str] = []

    def at(self, index: int) -> str:
        return self.word[index] if 0 <= index < len(self.word) else ""

    def take(self, start: int, end: int) -> None:
        self.parts.append(self.word[start:end])

    def special_at(self, index: int) -> str | None:
        """Replacement for ``$0``, ``$-`` or ``$<digit>`` at *index*."""
        if self.at(index) != "$":
            return None
        following = self.at(index + 1)
        if following == "0":
            return "bash"
        if following == "-":
            return "himBH"
        if _is_digit(following):
            return ""
        return None

    def variable(self) -> str:
        """Read a variable name at the cursor and return its value."""
        if self.at(self.pos) == "?":
            self.pos += 1
            return str(self.state.exit_status)
        begin = self.pos
        while _is_alnum(self.at(self.pos)) or self.at(self.pos) == "_":
            self.pos += 1
        return self.state.env.get(self.word[begin:self.pos])

    def single_quoted(self) -> str:
        end = self.word.find("'", self.pos)
        if end < 0:
            end = len(self.word)
        text = self.word[self.pos:end]
        self.pos = end + 1
        return text

    def double_quoted(self) -> str:
        word = self.word
        parts: list[str] = []
        start = self.pos
        while self.pos < len(word) and word[self.pos] != '"':
            index = self.pos
            following = self.at(index + 1)
            special = self.special_at(index)
            if special is not None:
                parts.append(word[start:index])
                parts.append(special)
                self.pos = index + 2
                start = self.pos
                continue
            if (
                word[index] == "$"
                and following != "$"
                and not _is_digit(following)
                and following != '"'
            ):
                parts.append(word[start:index])
                self.pos = index + 1
                parts.append(self.variable())
                start = self.pos
            elif word[index] == "$" and following == "$":
                self.pos = index + 2
                parts.append(word[start:self.pos])
                start = self.pos
            else:
                self.pos += 1
        parts.append(word[start:self.pos])
        self.pos += 1
        return "".join(parts)

    def quoted(self) -> bool:
        char = self.at(self.pos)
        if char not in ("'", '"'):
            return False
        self.take(self.start, self.pos)
        self.pos += 1
        if char == "'":
            self.parts.append(self.single_quoted())
        else:
            self.parts.append(self.double_quoted())
        self.start = self.pos
        return True

    def special(self) -> bool:
        replacement = self.special_at(self.pos)
        if replacement is None:
            return False
        self.take(self.start, self.pos)
        self.parts.append(replacement)
        self.pos += 2
        self.start = self.pos
        return True

    def double_dollar(self) -> bool:
        following = self.at(self.pos + 1)
        if self.at(self.pos) != "$" or following not in ("$", '"', "'"):
            return False
        if following == "$":
            self.pos += 2
            self.take(self.start, self.pos)
        else:
            self.take(self.start, self.pos)
            self.pos += 1
        self.start = self.pos
        return True

    def normal_var(self) -> bool:
        following = self.at(self.pos + 1)
        if self.at(self.pos) != "$" or following == "$":
            return False
        if not (_is_alnum(following) or following in ("_", "?")):
            return False
        self.take(self.start, self.pos)
        self.pos += 1
        self.parts.append(remove_var_spaces(self.variable()))
        self.start = self.pos
        return True

    def run(self, token: Token | None, heredoc: bool) -> str:
        while self.pos < len(self.word):
            if not heredoc and self.quoted():
                if token is not None:
                    token.kind = TokenType.VAR
            elif self.special() or self.double_dollar():
                continue
            elif self.normal_var():
                if token is not None and token.kind is not TokenType.VAR:
                    token.kind = TokenType.NORMAL_VAR
                continue
            else:
                self.pos += 1
        self.take(self.start, self.pos)
        return "".join(self.parts)


def expand_word(
    word: str,
    state: ShellState,
    token: Token | None = None,
    heredoc: bool = False,
) -> str:
    """Expand variables and remove quotes in *word*.

    When *token* is given its kind is updated: ``VAR`` if quotes were
    found, otherwise ``NORMAL_VAR`` if an unquoted variable was expanded.
    With *heredoc* set, quotes are kept as plain characters.
    """
    return _Scanner(word, state).run(token, heredoc)


def _wants_expansion(token: Token) -> bool:
    content = token.content
    dollar = content.find("$")
    if token.kind is not TokenType.WORD or dollar < 0:
        return False
    following = content[dollar + 1: dollar + 2]
    return following != "" and (_is_alnum(following) or following in _ACCEPTED_AFTER_DOLLAR)


def expand_tokens(tokens: MutableSequence[Token], state: ShellState) -> MutableSequence[Token]:
    """Expand ``~`` and variables in every token, in place."""
    for index, token in enumerate(tokens):
        if "~" in token.content:
            token.content = expand_home(token.content, state)
            token.kind = TokenType.VAR
        elif _wants_expansion(token):
            real_status = state.exit_status
            dollar = token.content.find("$")
            if token.content[dollar + 1: dollar + 2] == "?" and pipe_before(tokens, index):
                state.exit_status = 0
            try:
                token.content = expand_word(token.content, state, token)
                if token.kind is not TokenType.NORMAL_VAR:
                    token.kind = TokenType.VAR
            finally:
                state.exit_status = real_status
    return tokens