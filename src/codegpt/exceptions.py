"""Errors raised by codegpt."""


class CodegptError(Exception):
    """Base class for failures reported by the CLI."""


class ConfigError(CodegptError, ValueError):
    """Settings cannot be resolved from flags, environment and config file."""


class NetworkError(CodegptError):
    """The request could not be sent or its response could not be read."""


class ResponseParseError(CodegptError):
    """The response body is not valid JSON or not valid text."""


class UnescapeError(CodegptError):
    """The completion text contains a malformed escape sequence."""

    def __init__(self, message: str, index: int):
        super().__init__(f"{message} at index {index}")
        self.index = index
