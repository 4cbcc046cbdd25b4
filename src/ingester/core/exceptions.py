"""Ingester exception hierarchy."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    BAD_PARAMETER = "BAD_PARAMETER"
    BAD_FIELD_LENGTH = "BAD_FIELD_LENGTH"
    BAD_FORMAT = "BAD_FORMAT"
    ZERO_DIVISOR = "ZERO_DIVISOR"


class IngesterError(Exception):
    """Base exception for all ingester errors."""


class ConversionError(IngesterError):
    """Base of the field/record conversion failures."""

    kind: ErrorKind
    default_message: str = "Conversion failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class BadParameterError(ConversionError):
    """Input absent or of the wrong total length."""

    kind = ErrorKind.BAD_PARAMETER
    default_message = "Invalid parameter"


class BadFieldLengthError(ConversionError):
    """A field's byte span does not match its configured width."""

    kind = ErrorKind.BAD_FIELD_LENGTH
    default_message = "Unexpected field length"


class BadFormatError(ConversionError):
    """A field's content does not match its expected grammar."""

    kind = ErrorKind.BAD_FORMAT
    default_message = "Bad format"


class ZeroDivisorError(ConversionError):
    """A split-price "for X" divisor is zero."""

    kind = ErrorKind.ZERO_DIVISOR
    default_message = "Zero divisor"


class DecodeError(IngesterError):
    """A record that failed to decode, positioned at the offending field."""

    def __init__(
        self, line: int, column: int, field: bytes, message: str, cause: ConversionError
    ) -> None:
        self._line = line
        self._column = column
        self._field = bytes(field)
        self._message = message
        self._cause = cause
        super().__init__(line, column, self._field, message, cause)

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def field(self) -> bytes:
        return self._field

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> ConversionError:
        return self._cause

    @property
    def kind(self) -> ErrorKind:
        return self._cause.kind

    def __str__(self) -> str:
        text = self._field.decode("ascii", errors="replace")
        return f'({self._line}, {self._column}): "{text}" {self._message}: {self._cause}'


class LayoutError(IngesterError):
    """Record layout configuration is invalid."""


class ChannelClosedError(IngesterError):
    """Send or receive on a closed pipeline channel."""

    def __init__(self, channel: str) -> None:
        self.channel = channel
        super().__init__(f"Channel {channel!r} is closed")


class RecordStoreError(IngesterError):
    """Destination store rejected a record."""


class FileStoreError(IngesterError):
    """Catalog file storage operation failed."""
