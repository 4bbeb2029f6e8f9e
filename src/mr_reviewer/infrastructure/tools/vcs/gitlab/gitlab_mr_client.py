from typing import Any
from urllib.parse import quote

import structlog

from mr_reviewer.core.application.exceptions import ProviderError
from mr_reviewer.core.application.ports import Posted, PostResult, Rejected, VcsPort
from mr_reviewer.core.domain.merge_request import MergeRequestDetails, RawFileChange, ShaTriple
from mr_reviewer.core.domain.quality import FeedbackItem, Position
from mr_reviewer.infrastructure.tools.vcs.gitlab.gitlab_discussion_mapper import (
    convert_discussions_to_feedback,
)
from mr_reviewer.infrastructure.tools.vcs.gitlab.gitlab_http_client import (
    PROVIDER,
    GitLabHttpClient,
    error_message,
)

logger = structlog.get_logger()

_FATAL_POST_STATUSES = {401, 403, 429}


def _encode(value: str) -> str:
    return quote(str(value), safe="")


class GitLabMergeRequestClient(VcsPort):
    """VcsPort backed by the GitLab v4 merge request endpoints."""

    def __init__(self, http: GitLabHttpClient, diff_context_lines: int | None = None) -> None:
        self.http = http
        self.diff_context_lines = (
            http.settings.gitlab_diff_context_lines
            if diff_context_lines is None
            else diff_context_lines
        )

    def _mr_path(self, project_id: str, mr_iid: str) -> str:
        return f"projects/{_encode(project_id)}/merge_requests/{mr_iid}"

    async def get_merge_request(self, project: str, mr_iid: str) -> MergeRequestDetails:
        data = await self.http.get_json(self._mr_path(project, mr_iid))
        author = data.get("author") or {}
        references = data.get("references") or {}
        full_ref = references.get("full") or ""
        project_path = full_ref.split("!", 1)[0] if "!" in full_ref else str(project)
        logger.info(
            "Fetched merge request", project=project, mr_iid=mr_iid, title=data.get("title")
        )
        return MergeRequestDetails(
            project_id=str(data.get("project_id") or project),
            mr_iid=str(data.get("iid") or mr_iid),
            title=data.get("title") or "",
            description=data.get("description") or "",
            author_name=author.get("name") or author.get("username") or "",
            source_branch=data.get("source_branch") or "",
            target_branch=data.get("target_branch") or "",
            web_url=data.get("web_url") or "",
            project_path=project_path,
        )

    async def get_latest_version(self, project_id: str, mr_iid: str) -> ShaTriple:
        versions = await self.http.get_json(f"{self._mr_path(project_id, mr_iid)}/versions")
        if not versions:
            raise ProviderError(
                provider=PROVIDER,
                message=f"Merge request {mr_iid} has no diff versions",
                retryable=False,
            )
        latest = versions[0]
        return ShaTriple(
            base_sha=latest.get("base_commit_sha") or "",
            start_sha=latest.get("start_commit_sha") or "",
            head_sha=latest.get("head_commit_sha") or "",
        )

    async def get_existing_feedback(self, project_id: str, mr_iid: str) -> list[FeedbackItem]:
        discussions = await self.http.get_all_pages(
            f"{self._mr_path(project_id, mr_iid)}/discussions"
        )
        return convert_discussions_to_feedback(discussions)

    async def get_approvals(self, project_id: str, mr_iid: str) -> dict[str, Any] | None:
        try:
            return await self.http.get_json(f"{self._mr_path(project_id, mr_iid)}/approvals")
        except ProviderError as exc:
            if exc.status_code == 404:
                return None
            raise

    async def get_diffs(self, project_id: str, mr_iid: str) -> list[RawFileChange]:
        path = f"{self._mr_path(project_id, mr_iid)}/diffs"
        try:
            entries = await self.http.get_all_pages(
                path, {"context_lines": self.diff_context_lines}
            )
        except ProviderError as exc:
            if exc.status_code not in (400, 422):
                raise
            logger.warning(
                "context_lines not supported, retrying plain diff", status=exc.status_code
            )
            entries = await self.http.get_all_pages(path)
        return [_to_raw_change(entry) for entry in entries]

    async def get_file_content(self, project_id: str, file_path: str, ref: str) -> str | None:
        path = f"projects/{_encode(project_id)}/repository/files/{_encode(file_path)}/raw"
        try:
            return await self.http.get_text(path, {"ref": ref})
        except ProviderError as exc:
            if exc.status_code == 404:
                return None
            raise

    async def post_discussion(
        self, project_id: str, mr_iid: str, body: str, position: Position | None = None
    ) -> PostResult:
        payload: dict[str, Any] = {"body": body}
        if position is not None:
            payload["position"] = position.to_payload()

        response = await self.http.post_json(
            f"{self._mr_path(project_id, mr_iid)}/discussions", payload
        )
        status = response.status_code
        if 200 <= status < 300:
            data = response.json()
            return Posted(discussion_id=str(data.get("id", "")), inline=position is not None)

        reason = error_message(response)
        if status in _FATAL_POST_STATUSES or status >= 500:
            raise ProviderError(
                provider=PROVIDER,
                message=f"Discussion post failed with {status}: {reason}",
                retryable=status == 429 or status >= 500,
                status_code=status,
            )
        logger.info(
            "Discussion rejected", status=status, reason=reason, inline=position is not None
        )
        return Rejected(reason=reason, status_code=status)


def _to_raw_change(entry: dict[str, Any]) -> RawFileChange:
    new_path = entry.get("new_path") or entry.get("old_path") or ""
    return RawFileChange(
        old_path=entry.get("old_path") or new_path,
        new_path=new_path,
        diff=entry.get("diff") or "",
        new_file=bool(entry.get("new_file")),
        deleted_file=bool(entry.get("deleted_file")),
        renamed_file=bool(entry.get("renamed_file")),
    )
