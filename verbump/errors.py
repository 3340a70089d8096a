"""Exception hierarchy for verbump.

Two families matter to callers:
  SchemaError           Configuration problem. The schema itself is malformed,
                        or a render was requested that the value cannot satisfy.
                        Not retryable.
  VersionMismatchError  Data problem. A pin or version does not fit its schema.
                        Raised at the boundary, before anything is built.
"""


class VersioningError(Exception):
    """Base class for all verbump errors."""


class SchemaError(VersioningError):
    """The schema is malformed or cannot render the requested value."""


class VersionMismatchError(VersioningError, ValueError):
    """A pin or version string does not match the schema it was given."""

    def __init__(self, message, schema=None, value=None):
        super().__init__(message)
        self.schema = schema
        self.value = value


class CommitFormatError(VersioningError, ValueError):
    """A raw commit message is not a conventional commit."""
