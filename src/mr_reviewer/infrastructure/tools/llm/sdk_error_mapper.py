from typing import Any

from mr_reviewer.core.application.exceptions import ProviderError


def map_sdk_error(provider: str, sdk: Any, exc: Exception) -> ProviderError:
    """Map an anthropic/openai SDK exception onto ProviderError.

    Both SDKs expose the same error class names, so *sdk* is the imported
    vendor module.
    """
    if isinstance(exc, sdk.RateLimitError):
        return ProviderError(provider=provider, message=str(exc), retryable=True, status_code=429)
    if isinstance(exc, sdk.APIConnectionError):
        return ProviderError(provider=provider, message=str(exc), retryable=True)
    if isinstance(exc, sdk.AuthenticationError):
        return ProviderError(provider=provider, message=str(exc), retryable=False, status_code=401)
    if isinstance(exc, sdk.APIStatusError):
        code = getattr(exc, "status_code", None)
        retryable = bool(code == 429 or (isinstance(code, int) and code >= 500))
        return ProviderError(
            provider=provider, message=str(exc), retryable=retryable, status_code=code
        )
    return ProviderError(provider=provider, message=str(exc), retryable=False)
