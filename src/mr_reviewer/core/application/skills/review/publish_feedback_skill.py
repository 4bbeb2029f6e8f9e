import logging
from dataclasses import dataclass, field

from mr_reviewer.core.application.exceptions import ProviderError
from mr_reviewer.core.application.ports import Posted, Rejected, VcsPort
from mr_reviewer.core.application.skills.review.review_comment_formatter import (
    format_general_comment,
    format_inline_comment,
)
from mr_reviewer.core.application.skills.skill import BaseSkill
from mr_reviewer.core.domain.quality import FeedbackItem, FeedbackStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishFeedbackInput:
    project_id: str
    mr_iid: str
    feedback: list[FeedbackItem]
    summary_note: str = ""


@dataclass
class PublishFeedbackReport:
    inline: int = 0
    general: int = 0
    failed: list[FeedbackItem] = field(default_factory=list)
    summary_posted: bool = False

    @property
    def submitted(self) -> int:
        return self.inline + self.general


class PublishFeedbackSkill(BaseSkill[PublishFeedbackInput, PublishFeedbackReport]):
    """Posts curated feedback to the merge request, one discussion per item.

    Each item moves ``pending -> submitting -> submitted|error``. Items with a
    complete position are posted inline first; an inline post that is
    rejected, or fails with a server error, is retried as a general comment
    that names the file and line. Only a failed general post, or an inline
    auth, rate-limit or connection failure, ends in ``error``.
    Failures are recorded on the item and never stop the remaining items.
    """

    def __init__(self, vcs: VcsPort) -> None:
        self._vcs = vcs

    async def execute(self, input_data: PublishFeedbackInput) -> PublishFeedbackReport:
        report = PublishFeedbackReport()
        for item in input_data.feedback:
            if item.is_existing or item.status != FeedbackStatus.PENDING:
                continue
            await self._publish_item(input_data, item, report)
        if input_data.summary_note:
            report.summary_posted = await self._publish_summary(input_data)
        logger.info(
            "[PublishFeedback] inline=%d general=%d failed=%d",
            report.inline,
            report.general,
            len(report.failed),
        )
        return report

    async def _publish_item(
        self, input_data: PublishFeedbackInput, item: FeedbackItem, report: PublishFeedbackReport
    ) -> None:
        item.mark_submitting()
        if item.position is not None and item.position.is_complete():
            try:
                if await self._post_inline(input_data, item):
                    item.mark_submitted()
                    report.inline += 1
                    return
            except ProviderError as exc:
                if not _is_server_error(exc):
                    self._record_failure(item, report, str(exc))
                    return
                logger.info(
                    "[PublishFeedback] Inline failed for %s:%d (%s), falling back to general",
                    item.file_path,
                    item.line_number,
                    exc,
                )
        try:
            result = await self._vcs.post_discussion(
                input_data.project_id, input_data.mr_iid, format_general_comment(item)
            )
        except ProviderError as exc:
            self._record_failure(item, report, str(exc))
            return
        if isinstance(result, Posted):
            item.mark_submitted()
            report.general += 1
            return
        logger.warning(
            "[PublishFeedback] General comment rejected for %s: %s", item.id, result.reason
        )
        item.mark_error(result.reason)
        report.failed.append(item)

    @staticmethod
    def _record_failure(item: FeedbackItem, report: PublishFeedbackReport, error: str) -> None:
        logger.warning("[PublishFeedback] Transport failure for %s: %s", item.id, error)
        item.mark_error(error)
        report.failed.append(item)

    async def _post_inline(self, input_data: PublishFeedbackInput, item: FeedbackItem) -> bool:
        result = await self._vcs.post_discussion(
            input_data.project_id,
            input_data.mr_iid,
            format_inline_comment(item),
            item.position,
        )
        if isinstance(result, Rejected):
            logger.info(
                "[PublishFeedback] Inline rejected for %s:%d (%s), falling back to general",
                item.file_path,
                item.line_number,
                result.reason,
            )
            return False
        return True

    async def _publish_summary(self, input_data: PublishFeedbackInput) -> bool:
        try:
            result = await self._vcs.post_discussion(
                input_data.project_id, input_data.mr_iid, input_data.summary_note
            )
        except ProviderError as exc:
            logger.warning("[PublishFeedback] Summary note failed: %s", exc)
            return False
        if isinstance(result, Rejected):
            logger.warning("[PublishFeedback] Summary note rejected: %s", result.reason)
            return False
        return True


def _is_server_error(exc: ProviderError) -> bool:
    return exc.status_code is not None and exc.status_code >= 500
