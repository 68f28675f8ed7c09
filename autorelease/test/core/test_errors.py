"""Tests for autorelease.core.errors module."""

from autorelease.core.errors import ErrorCode


class TestErrorCodeValues:
    """Exit codes are part of the CLI contract and must stay stable."""

    def test_ok_is_zero(self) -> None:
        assert ErrorCode.OK == 0

    def test_user_error_is_one(self) -> None:
        assert ErrorCode.USER_ERROR == 1

    def test_env_error_is_two(self) -> None:
        assert ErrorCode.ENV_ERROR == 2

    def test_publish_error_is_three(self) -> None:
        assert ErrorCode.PUBLISH_ERROR == 3


class TestErrorCodeUsage:
    def test_can_use_as_int(self) -> None:
        code: int = ErrorCode.PUBLISH_ERROR
        assert code == 3

    def test_str(self) -> None:
        assert str(ErrorCode.PUBLISH_ERROR) == "publish error"
        assert str(ErrorCode.OK) == "ok"

