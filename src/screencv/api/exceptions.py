"""Public exceptions for screencv API."""


class ScreenCVError(Exception):
    """Base class for all user-facing screencv errors."""


class ScreenCVValidationError(ScreenCVError):
    """Raised when user-provided config or input is invalid."""


class InvalidPartition(ScreenCVValidationError):
    """Raised when folds overlap, leave gaps, or do not match the dataset."""


class DegenerateScreen(ScreenCVValidationError):
    """Raised when feature screening has no usable variance to rank."""


class DimensionMismatch(ScreenCVValidationError):
    """Raised when feature counts disagree between records or views."""
