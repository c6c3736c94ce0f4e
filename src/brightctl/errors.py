from __future__ import annotations


class BrightnessError(RuntimeError):
    """Base class for every failure reported to the user."""


class InvalidArgument(BrightnessError):
    pass


class OutOfRange(BrightnessError):
    pass


class DeviceNotFound(BrightnessError):
    pass


class ListFailed(BrightnessError):
    pass


class CorruptValue(BrightnessError):
    pass


class NoSavedState(BrightnessError):
    pass


class IOFailure(BrightnessError):
    pass
