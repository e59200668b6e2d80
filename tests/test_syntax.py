import pytest

from minish.syntax import (
    GENERIC_ERROR,
    REDIRECT_ERROR,
    UNCLOSED_QUOTES,
    ShellSyntaxError,
    check_multi_pipes,
    check_tokens,
    first_syntax_check,
    in_out_check,
)
from minish.tokens import tokenize, tokenize_line


@pytest.mark.parametrize(
    "line, expected",
    [("a|||b", True), ("a| |b", True), ("a||b", False), ("a|b", False)],
)
def test_check_multi_pipes(line, expected):
    assert check_multi_pipes(line) is expected


@pytest.mark.parametrize("line", ["cat <| x", "cat < < x", "cat <<< x", "echo >>> f", "echo > > f", "echo <> f"])
def test_in_out_check_rejects_bad_redirections(line):
    with pytest.raises(ShellSyntaxError) as info:
        in_out_check(line)
    assert str(info.value) == GENERIC_ERROR


def test_in_out_check_rejects_trailing_operator():
    with pytest.raises(ShellSyntaxError) as info:
        in_out_check("ls >")
    assert str(info.value) == REDIRECT_ERROR


def test_in_out_check_rejects_digits_between_redirections():
    with pytest.raises(ShellSyntaxError) as info:
        in_out_check("echo >12> f")
    assert str(info.value) == REDIRECT_ERROR


@pytest.mark.parametrize("line", ["cat < in > out", "cat << EOF", "echo hi >> log", "echo >1 f"])
def test_in_out_check_accepts_valid(line):
    assert in_out_check(line) == line


def test_first_syntax_check_unclosed_quotes():
    with pytest.raises(ShellSyntaxError) as info:
        first_syntax_check("echo 'hello")
    assert str(info.value) == UNCLOSED_QUOTES


@pytest.mark.parametrize("line", ["  | ls", "ls |", "ls <", "a ||| b", "a | | b"])
def test_first_syntax_check_generic_errors(line):
    with pytest.raises(ShellSyntaxError) as info:
        first_syntax_check(line)
    assert str(info.value) == GENERIC_ERROR


def test_first_syntax_check_trailing_redirect():
    with pytest.raises(ShellSyntaxError) as info:
        first_syntax_check("ls >")
    assert str(info.value) == REDIRECT_ERROR


@pytest.mark.parametrize("line", ["echo 'a|b' > out", "  ls -l | wc", "cat << EOF | grep x"])
def test_first_syntax_check_accepts_valid(line):
    assert first_syntax_check(line) == line


def test_syntax_error_exit_status():
    with pytest.raises(ShellSyntaxError) as info:
        first_syntax_check("| x")
    assert info.value.exit_status == 258


def test_check_tokens_redirection_before_pipe():
    with pytest.raises(ShellSyntaxError) as info:
        check_tokens(tokenize(["cat", "<", "|", "x"]))
    assert str(info.value) == "minishell: Syntax Error! near unexpected token `|'"


def test_check_tokens_heredoc_before_pipe():
    with pytest.raises(ShellSyntaxError) as info:
        check_tokens(tokenize(["<<", "|"]))
    assert "`|'" in str(info.value)


def test_check_tokens_redirection_before_redirection():
    with pytest.raises(ShellSyntaxError) as info:
        check_tokens(tokenize([">", ">>", "f"]))
    assert str(info.value).endswith("`>>'")


def test_check_tokens_accepts_valid():
    tokens = tokenize_line("cat << EOF < in >> out | wc > f")
    assert check_tokens(tokens) is tokens