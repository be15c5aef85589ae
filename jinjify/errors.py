from __future__ import annotations


class CompileError(Exception):
    """A template could not be turned into a module body.

    ``name`` is the file path or identifier the failure belongs to.
    """

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name

    def __str__(self) -> str:
        message = super().__str__()
        if self.name:
            return f"{self.name}: {message}"
        return message


class MinifyError(CompileError):
    """The minifier rejected the markup."""


class TokenizeError(CompileError):
    """The template syntax could not be tokenized."""

    def __init__(self, message: str, name: str | None = None, lineno: int | None = None) -> None:
        super().__init__(message, name)
        self.lineno = lineno

    def __str__(self) -> str:
        text = super().__str__()
        if self.lineno is not None:
            return f"{text} (line {self.lineno})"
        return text
