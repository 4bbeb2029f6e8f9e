from typing import Any

import httpx
import structlog

from mr_reviewer.core.application.exceptions import ProviderError
from mr_reviewer.infrastructure.configuration.gitlab_settings import GitLabSettings

logger = structlog.get_logger()

PROVIDER = "gitlab"
_MAX_PAGES = 50


class GitLabHttpClient:
    """Thin async wrapper over the GitLab v4 REST API.

    Read helpers raise ProviderError for HTTP and transport failures;
    ``post_json`` returns the response so callers can inspect rejections.
    """

    def __init__(self, settings: GitLabSettings, client: httpx.AsyncClient | None = None) -> None:
        settings.validate_gitlab_credentials()
        self.settings = settings
        self.base_url = f"{settings.gitlab_base_url}/api/v4"
        self._client = client or httpx.AsyncClient(timeout=settings.gitlab_timeout_seconds)

    async def __aenter__(self) -> "GitLabHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _get_headers(self) -> dict[str, str]:
        token = self.settings.gitlab_token.get_secret_value() if self.settings.gitlab_token else ""
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "PRIVATE-TOKEN": token,
        }

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            response = await self._client.get(
                self._url(path), headers=self._get_headers(), params=params
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise to_provider_error(exc) from exc
        except httpx.RequestError as exc:
            raise ProviderError(
                provider=PROVIDER, message=f"Request to {path} failed: {exc}", retryable=True
            ) from exc
        return response

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self.get(path, params)
        return response.json()

    async def get_text(self, path: str, params: dict[str, Any] | None = None) -> str:
        response = await self.get(path, params)
        return response.text

    async def get_all_pages(
        self, path: str, params: dict[str, Any] | None = None, per_page: int = 100
    ) -> list[Any]:
        """Follow GitLab's ``X-Next-Page`` header and concatenate list pages."""
        items: list[Any] = []
        page: str | None = "1"
        fetched = 0
        while page and fetched < _MAX_PAGES:
            response = await self.get(path, {**(params or {}), "per_page": per_page, "page": page})
            body = response.json()
            if not isinstance(body, list):
                return items
            items.extend(body)
            page = response.headers.get("x-next-page") or None
            fetched += 1
        return items

    async def post_json(self, path: str, json_data: dict[str, Any]) -> httpx.Response:
        try:
            return await self._client.post(
                self._url(path), headers=self._get_headers(), json=json_data
            )
        except httpx.RequestError as exc:
            raise ProviderError(
                provider=PROVIDER, message=f"Request to {path} failed: {exc}", retryable=True
            ) from exc


def to_provider_error(exc: httpx.HTTPStatusError) -> ProviderError:
    status = exc.response.status_code
    if status == 401:
        message = "Authentication failed: invalid or expired GitLab token"
    elif status == 403:
        message = "Access denied: the GitLab token lacks permission for this project"
    elif status == 404:
        message = f"Resource not found: {exc.request.url.path}"
    else:
        message = f"GitLab API error {status}: {error_message(exc.response)}"
    return ProviderError(
        provider=PROVIDER,
        message=message,
        retryable=status == 429 or status >= 500,
        status_code=status,
    )


def error_message(response: httpx.Response) -> str:
    """Best-effort extraction of GitLab's ``message``/``error`` field."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:300]
    if isinstance(body, dict):
        detail = body.get("message") or body.get("error") or body
        return str(detail)[:300]
    return str(body)[:300]
