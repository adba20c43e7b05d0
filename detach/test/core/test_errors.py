"""Tests for detach.core.errors module."""

from detach.core.errors import ErrorCode


class TestErrorCodeValues:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.ENV_ERROR == 2
        assert ErrorCode.STEP_ERROR == 3
        assert ErrorCode.IO_ERROR == 5

    def test_str_is_human_readable(self) -> None:
        assert str(ErrorCode.STEP_ERROR) == "step error"
        assert str(ErrorCode.OK) == "ok"


class TestErrorCodeProperties:
    def test_success(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.OK.is_error

    def test_errors(self) -> None:
        for code in ErrorCode:
            if code is ErrorCode.OK:
                continue
            assert code.is_error
            assert not code.is_success
