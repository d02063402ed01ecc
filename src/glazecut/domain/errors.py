"""Domain errors raised while reconstructing cutting layouts.

Both errors are local to a single profile or sheet. Callers that build a
batch (see ``BuildSolutionCommand``) catch ``LayoutError`` per item so one
bad profile never aborts the others.
"""


class LayoutError(Exception):
    """Base class for errors raised by layout reconstruction.

    Attributes:
        subject: Profile name, sheet type or plan key the error refers to.
        message: Human-readable description of the problem.
    """

    kind = "layout"

    def __init__(self, message: str, subject: str = "") -> None:
        self.message = message
        self.subject = subject
        super().__init__(message)

    def __str__(self) -> str:
        if self.subject:
            return f"{self.subject}: {self.message}"
        return self.message


class DecodeError(LayoutError):
    """Raised when a plan key or sheet type has no recognizable dimension."""

    kind = "decode"


class IntegrityError(LayoutError):
    """Raised when cuts exceed the stock bar or sheet they are planned on.

    A negative off-cut or waste means the upstream calculation result is
    wrong. It is reported, never clamped to zero.
    """

    kind = "integrity"
