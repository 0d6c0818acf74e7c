"""
This module contains the exceptions raised by razorsnap.

Note that none of these ever reach the build host: the load listener contains every failure
raised while processing a build event.
"""


class RazorSnapshotException(Exception):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """
        :param message: the message describing the exception
        :param cause: the original exception that caused this exception, if any
        """
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        s = super().__str__()
        if self.cause:
            if "\n" in s:
                s += "\n"
            else:
                s += " "
            s += f"(caused by {self.cause})"
        return s


class ProjectEvaluationError(RazorSnapshotException):
    """
    Raised when a dumped project evaluation cannot be read or does not have the expected shape.
    """

    def __init__(self, path: str, message: str, cause: Exception | None = None) -> None:
        self.path = path
        super().__init__(f"Invalid project evaluation in {path}: {message}", cause=cause)


class ListenerConfigError(RazorSnapshotException):
    pass
