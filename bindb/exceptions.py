"""Exceptions for the bindb package."""


class StoreError(Exception):
    """Base exception for all store errors."""

    pass


class NotFoundError(StoreError, KeyError):
    """No value exists at the specified path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No value at path: {path}")


class TypeMismatchError(StoreError, TypeError):
    """Value at a path is not of the type an operation requires."""

    def __init__(self, path: str, expected: type, actual: type):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Path {path} expects {expected.__name__}, got {actual.__name__}"
        )


class SerializationError(StoreError):
    """Failed to encode or decode a document."""

    pass


class EncodeError(SerializationError):
    """Document contains a value the codec cannot represent."""

    pass


class DecodeError(SerializationError):
    """Persisted bytes are not a valid encoded document."""

    pass


class InvalidConfigError(StoreError, ValueError):
    """Configuration value could not be interpreted."""

    pass
