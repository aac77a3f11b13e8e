class QOIError(ValueError):
    """Base class for everything the codec raises."""


class InvalidInputError(QOIError):
    """The caller supplied pixels or a description the codec cannot handle."""


class FormatError(QOIError):
    """The byte stream is not a valid QOI image."""


class TruncatedStreamError(FormatError):
    """The byte stream ended before the image was complete."""
