"""Exception types raised by the RHS evaluator."""


class SpinRHSError(Exception):
    """Base class for all spinrhs errors."""


class ShapeMismatchError(SpinRHSError, ValueError):
    """Raised when spin, output and effective field arrays disagree in shape."""

    def __init__(self, name: str, expected, got):
        self.name = name
        self.expected = tuple(expected) if expected is not None else None
        self.got = tuple(got)
        if self.expected is None:
            msg = f"{name} must have shape (3, M, N) with M, N >= 1, got {self.got}"
        else:
            msg = f"{name} must have shape {self.expected}, got {self.got}"
        super().__init__(msg)


class ConfigError(SpinRHSError, ValueError):
    """Raised when a required parameter field is missing or malformed."""

    def __init__(self, field: str, reason: str = "missing"):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid parameter '{field}': {reason}")
