"""Recoverable record errors raised by the core parsers."""


class RecordError(ValueError):
    """A persisted record could not be turned into a domain object."""

    def __init__(self, message: str, record: object = None):
        super().__init__(message)
        self.record = record


class MalformedRecord(RecordError):
    """A record is missing a required field or has the wrong shape."""


class InvalidAnchorDate(RecordError):
    """An event's anchor date could not be parsed."""
