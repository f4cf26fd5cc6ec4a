"""Test the Result type for explicit error handling."""

import pytest

from vitalcore.services.result import Result


class TestResult:
    def test_result_ok_creates_successful_result(self) -> None:
        result: Result[str, Exception] = Result.ok("success")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "success"

    def test_result_error_creates_failed_result(self) -> None:
        error = ValueError("test error")
        result: Result[str, ValueError] = Result.err(error)
        assert not result.is_ok()
        assert result.is_err()
        assert result.unwrap_or("default") == "default"
        assert result.unwrap_err() is error

    def test_unwrap_raises_on_error_result(self) -> None:
        result: Result[str, ValueError] = Result.err(ValueError("test error"))

        with pytest.raises(ValueError, match="test error"):
            result.unwrap()

    def test_unwrap_err_raises_on_ok_result(self) -> None:
        with pytest.raises(ValueError, match="unwrap_err"):
            Result.ok(1).unwrap_err()

    def test_result_needs_exactly_one_side(self) -> None:
        with pytest.raises(ValueError):
            Result()

        with pytest.raises(ValueError):
            Result(value=1, error=ValueError("both"))
