"""
Errors raised by path-addressed access to a value tree.

The merge engine never raises; every failure here comes from
jsonsmith.core.paths.
"""


class PathError(ValueError):
    """
    Base class for path addressing failures.

    Attributes:
        path: The full dot-notation path that was requested.
        segment: The segment being resolved when the failure occurred
            (None when the path could not be split at all).
    """

    def __init__(self, message: str, *, path: str, segment: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.segment = segment


class InvalidPathError(PathError):
    """The path is empty or not a string."""

    pass


class NotTraversableError(PathError):
    """A key lookup was required on a value that is not an object."""

    pass


class PathNotFoundError(PathError):
    """An object on the path does not contain the requested key."""

    pass
