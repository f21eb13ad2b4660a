"""Exception hierarchy for Zenith Studio."""


class ZenithError(Exception):
    """Base class for all errors raised by zenith_studio."""


class GenerationError(ZenithError):
    """A text or image service call failed (transport, quota, model error)."""


class InvalidOutputError(GenerationError):
    """The model answered, but not in the shape we asked for."""


class GenerationBusyError(ZenithError):
    """A generation call is already pending for this builder."""


class FormValidationError(ZenithError):
    """User input was rejected before any network call or state change."""
