"""Error taxonomy shared by the store, resolver, transformer and controller."""


class StationViewError(Exception):
    """Base class for every error raised by stationview."""


class EmptyResponseError(StationViewError):
    """A fetch returned zero records; the load attempt is abandoned."""


class FetchError(StationViewError):
    """The remote source failed: transport error, bad status, or malformed body."""


class UnknownUnitError(StationViewError, ValueError):
    """A unit name is not present in the unit registry."""


class InvalidPresetError(StationViewError, ValueError):
    """A window preset name is not recognised."""


class WindowInputError(StationViewError, ValueError):
    """User-supplied custom window input was rejected.

    The message is meant to be shown to the user as-is.
    """


class NotANumberError(WindowInputError):
    def __init__(self, text: object = None) -> None:
        super().__init__("Only use numbers!")
        self.text = text


class OutOfRangeError(WindowInputError):
    def __init__(self, hours: float | None = None) -> None:
        super().__init__("Hours can't be less or equal to 0 or higher than 2160!")
        self.hours = hours


class EmptySliceError(StationViewError):
    """A latest value was requested from an empty slice.

    Loads reject empty responses, so this indicates a logic defect.
    """


class ReloadInProgressError(StationViewError):
    """A window change arrived while a reload is still in flight."""


class NotReadyError(StationViewError):
    """The controller has no data yet; load it before changing the window."""
