from abc import ABC, abstractmethod
from typing import Any

from mr_reviewer.core.application.ports.post_result import PostResult
from mr_reviewer.core.domain.merge_request import MergeRequestDetails, RawFileChange, ShaTriple
from mr_reviewer.core.domain.quality import FeedbackItem, Position


class VcsPort(ABC):
    """Port for merge request hosting (GitLab-shaped).

    Read operations raise ProviderError on failure. ``post_discussion``
    reports host rejection through its return value and raises
    ProviderError only when the host could not be reached.
    """

    @abstractmethod
    async def get_merge_request(self, project: str, mr_iid: str) -> MergeRequestDetails:
        """Fetch MR metadata. *project* is a numeric id or a namespaced path."""

    @abstractmethod
    async def get_latest_version(self, project_id: str, mr_iid: str) -> ShaTriple:
        """Return the SHA triple of the most recent diff version."""

    @abstractmethod
    async def get_existing_feedback(self, project_id: str, mr_iid: str) -> list[FeedbackItem]:
        """Return inline human or bot comments already on the MR."""

    @abstractmethod
    async def get_approvals(self, project_id: str, mr_iid: str) -> dict[str, Any] | None:
        """Return the approval state, or None when the host does not expose it."""

    @abstractmethod
    async def get_diffs(self, project_id: str, mr_iid: str) -> list[RawFileChange]:
        """Return the per-file unified diffs of the MR."""

    @abstractmethod
    async def get_file_content(self, project_id: str, file_path: str, ref: str) -> str | None:
        """Return raw file content at *ref*, or None when the file does not exist there."""

    @abstractmethod
    async def post_discussion(
        self, project_id: str, mr_iid: str, body: str, position: Position | None = None
    ) -> PostResult:
        """Create a discussion, inline when *position* is given."""
