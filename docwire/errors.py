class DocwireError(Exception):
    """Base exception for docwire errors."""


class UnsupportedFeatureError(DocwireError):
    """The selected server or write concern cannot carry a requested feature."""

    def __init__(self, message: str, feature: str | None = None) -> None:
        super().__init__(message)
        self.feature = feature


class InvalidSortError(DocwireError, ValueError):
    """A sort specification could not be turned into field/direction pairs."""


class OptionsFrozenError(DocwireError):
    """Operation options were written after they were frozen for dispatch."""


class OperationStateError(DocwireError):
    """An operation was used in a way its current state does not allow."""


class AspectRegistrationError(DocwireError):
    """An operation kind was given aspects more than once."""


class DispatchError(DocwireError):
    """The server dispatch primitive raised instead of calling back."""
