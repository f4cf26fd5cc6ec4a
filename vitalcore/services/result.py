"""Result type for expected, non-exceptional failures."""

from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Used where bad input is routine (sensor documents with junk fields) and the
    caller decides whether to skip it or surface it.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error
