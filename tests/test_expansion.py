import pytest

from minish.environment import Environment, ShellState
from minish.expansion import expand_home, expand_tokens, expand_word, remove_var_spaces
from minish.tokens import Token, TokenType, tokenize_line

USER = "alice"
HOME = "/home/alice"
SPACED = "a   b"


@pytest.fixture
def state():
    env = Environment.from_envp([f"USER={USER}", f"HOME={HOME}", f"SPACED={SPACED}"])
    return ShellState(env, exit_status=42)


@pytest.mark.parametrize("text", ["", "a", "a b", "one two three"])
def test_remove_var_spaces_keeps_single_spaced(text):
    assert remove_var_spaces(text) == text


def test_remove_var_spaces_never_doubles():
    result = remove_var_spaces("  x    y   z  ")
    assert "  " not in result
    assert result.split() == ["x", "y", "z"]
    assert result.startswith(" ") and result.endswith(" ")


def test_expand_home(state):
    assert expand_home("~", state) == HOME
    assert expand_home("~/docs", state) == HOME + "/docs"
    assert expand_home("a~b", state) == "a~b"


def test_plain_variable(state):
    token = Token("$USER", TokenType.WORD)
    assert expand_word("$USER", state, token) == USER
    assert token.kind is TokenType.NORMAL_VAR


def test_variable_inside_text(state):
    assert expand_word("hi$USER!", state) == "hi" + USER + "!"


def test_single_quotes_block_expansion(state):
    token = Token("'$USER'", TokenType.WORD)
    assert expand_word("'$USER'", state, token) == "$USER"
    assert token.kind is TokenType.VAR


def test_double_quotes_expand_and_keep_spaces(state):
    token = Token('"$SPACED"', TokenType.WORD)
    assert expand_word('"$SPACED"', state, token) == SPACED
    assert token.kind is TokenType.VAR


def test_unquoted_value_is_squeezed(state):
    assert expand_word("$SPACED", state) == "a b"


@pytest.mark.parametrize(
    "word, expected", [("$0", "bash"), ("$-", "himBH"), ('"$0"', "bash")]
)
def test_special_variables(state, word, expected):
    assert expand_word(word, state) == expected


def test_positional_parameter_is_dropped(state):
    assert expand_word("$1x", state) == "x"


def test_exit_status(state):
    assert expand_word("$?", state) == str(state.exit_status)


def test_double_dollar_is_literal(state):
    assert expand_word("$$", state) == "$$"


def test_unknown_variable_is_empty(state):
    assert expand_word("$MISSING", state) == ""


def test_heredoc_keeps_quotes(state):
    assert expand_word("'$USER'", state, heredoc=True) == "'" + USER + "'"


def test_expand_tokens_exit_status_after_pipe(state):
    state.exit_status = 7
    tokens = expand_tokens(tokenize_line("echo $? | echo $?"), state)
    assert tokens[1].content == "7"
    assert tokens[4].content == "0"
    assert state.exit_status == 7


def test_expand_tokens_leaves_delimiter(state):
    tokens = expand_tokens(tokenize_line("cat << $USER"), state)
    assert tokens[2].kind is TokenType.DELIMITER
    assert tokens[2].content == "$USER"


def test_expand_tokens_home(state):
    tokens = expand_tokens(tokenize_line("cd ~"), state)
    assert tokens[1].content == HOME
    assert tokens[1].kind is TokenType.VAR


def test_expand_tokens_lone_dollar_untouched(state):
    tokens = expand_tokens(tokenize_line("echo $"), state)
    assert tokens[1].content == "$"
    assert tokens[1].kind is TokenType.WORD


def test_expand_tokens_kinds(state):
    tokens = expand_tokens(tokenize_line("echo $USER \"$USER\""), state)
    assert [t.content for t in tokens] == ["echo", USER, USER]
    assert tokens[1].kind is TokenType.NORMAL_VAR
    assert tokens[2].kind is TokenType.VAR