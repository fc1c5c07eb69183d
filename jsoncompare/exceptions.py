"""Custom exceptions for jsoncompare."""


class JsonCompareError(Exception):
    """Base exception for jsoncompare errors."""
    pass


class MalformedJsonError(JsonCompareError):
    """Raised when an input string is not parseable JSON."""
    def __init__(
        self,
        message: str,
        position: int = None,
        line: int = None,
        column: int = None,
        source: str = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        self.source = source

    def __str__(self):
        if self.source:
            return f"{self.source} input: {self.message}"
        return self.message


class TemplateStorageError(JsonCompareError):
    """Raised when the template store cannot be read or written."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Template store '{path}' unusable: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(JsonCompareError):
    """Raised when a configuration file is invalid."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
