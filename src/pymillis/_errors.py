"""Exception hierarchy for millisecond (de)serialization."""


class MillisError(Exception):
    """Base exception for millisecond conversion errors.

    Provides dual messaging: a stable user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class MillisecondRangeError(MillisError, ValueError):
    """Raised when a value cannot be represented as milliseconds, or back."""


class InvalidWireValueError(MillisError, TypeError):
    """Raised when wire data is not an integer (or null, for optionals)."""


class UnsupportedTypeError(MillisError, TypeError):
    """Raised when a type is outside the supported set."""


ERR_MSG_OUT_OF_RANGE = "millisecond value is out of range"
ERR_MSG_INVALID_WIRE_VALUE = "millisecond value must be an integer"
ERR_MSG_UNSUPPORTED_TYPE = "type cannot be serialized as milliseconds"
