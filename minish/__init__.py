"""Parsing front end of a small interactive shell: lexing, syntax checks, expansion, commands and here-documents."""

__version__ = "0.1.0"
__all__ = ["commands", "environment", "expansion", "heredoc", "shell", "syntax", "tokens"]