from unittest.mock import AsyncMock

import pytest

from mr_reviewer.core.application.exceptions import ProviderError
from mr_reviewer.infrastructure.common.retry import RetryPolicy

POLICY = RetryPolicy(max_attempts=3, initial_wait=0, max_wait=0)


def _error(**overrides) -> ProviderError:
    data = {"provider": "anthropic", "message": "boom", "retryable": True}
    data.update(overrides)
    return ProviderError(**data)


class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_returns_first_success(self) -> None:
        fn = AsyncMock(return_value="ok")
        assert await POLICY.run(fn) == "ok"
        fn.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_retries_rate_limits_until_success(self) -> None:
        fn = AsyncMock(side_effect=[_error(status_code=429), _error(status_code=429), "ok"])
        assert await POLICY.run(fn) == "ok"
        assert fn.await_count == 3

    @pytest.mark.asyncio
    async def test_reraises_last_rate_limit_error(self) -> None:
        last = _error(message="rate limit exceeded")
        fn = AsyncMock(side_effect=[_error(status_code=429), _error(status_code=429), last])
        with pytest.raises(ProviderError) as exc_info:
            await POLICY.run(fn)
        assert exc_info.value is last

    @pytest.mark.asyncio
    async def test_other_errors_propagate_immediately(self) -> None:
        fn = AsyncMock(side_effect=_error(status_code=503))
        with pytest.raises(ProviderError):
            await POLICY.run(fn)
        fn.assert_awaited_once()


class TestProviderError:
    @pytest.mark.parametrize(
        "message, status_code, expected",
        [
            ("anything", 429, True),
            ("Error 429 Too Many Requests", None, True),
            ("Rate limit reached", None, True),
            ("rate_limit_error", 400, True),
            ("overloaded", 529, False),
        ],
    )
    def test_is_rate_limited(self, message: str, status_code, expected: bool) -> None:
        assert _error(message=message, status_code=status_code).is_rate_limited is expected

    def test_str_includes_provider_and_status(self) -> None:
        assert str(_error(status_code=502)) == "anthropic: boom status=502"
