"""Deterministic merge request review pipeline."""

import asyncio
from collections.abc import Callable
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars

from mr_reviewer.core.application.exceptions import (
    ProviderError,
    SkillExecutionError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)
from mr_reviewer.core.application.ports import VcsPort
from mr_reviewer.core.application.skills.review.analyze_code_review_skill import (
    AnalyzeCodeReviewOutput,
    AnalyzeCodeReviewSkill,
)
from mr_reviewer.core.application.skills.review.contracts import PromptStrategy
from mr_reviewer.core.application.skills.review.curation import create_review_summary
from mr_reviewer.core.application.skills.review.diff import (
    ContentInclusionPolicy,
    DiffParseResult,
    parse_diffs_to_hunks,
)
from mr_reviewer.core.application.skills.review.positioning import resolve_positions
from mr_reviewer.core.application.skills.review.prompt_templates import (
    MatchKind,
    ReviewPromptRequest,
    resolve_project_prompt,
)
from mr_reviewer.core.application.skills.review.publish_feedback_skill import (
    PublishFeedbackInput,
    PublishFeedbackReport,
    PublishFeedbackSkill,
)
from mr_reviewer.core.application.workflows.base_workflow import BaseWorkflow
from mr_reviewer.core.application.workflows.review.review_contracts import (
    ReviewOutcome,
    ReviewPromptConfig,
    ReviewRequest,
)
from mr_reviewer.core.domain.merge_request import MergeRequestDetails, RawFileChange, ShaTriple
from mr_reviewer.core.domain.quality import FeedbackItem, OverallRating, ReviewResult

logger = structlog.get_logger()

NO_CHANGES_SUMMARY = "No file changes to review."


class CodeReviewWorkflow(BaseWorkflow):
    """Review pipeline: Fetch MR -> Fetch context -> Fetch diffs -> Fetch contents
    -> Render -> Analyze -> Position -> Publish.

    MR details, the latest diff version and the diff listing are required;
    discussions, approvals and per-file contents degrade to empty values.
    """

    def __init__(
        self,
        vcs: VcsPort,
        analyze: AnalyzeCodeReviewSkill,
        publish: PublishFeedbackSkill,
        policy: ContentInclusionPolicy | None = None,
        prompt_config: ReviewPromptConfig | None = None,
        read_prompt_file: Callable[[str], str] | None = None,
        redact_error: Callable[[str], str] | None = None,
    ) -> None:
        self._vcs = vcs
        self._analyze = analyze
        self._publish = publish
        self._policy = policy or ContentInclusionPolicy()
        self._prompt_config = prompt_config or ReviewPromptConfig()
        self._read_prompt_file = read_prompt_file or (lambda _path: "")
        self._redact_error = redact_error or str

    async def execute(self, request: ReviewRequest) -> ReviewOutcome:
        """Orchestrate the full review of one merge request."""
        bind_contextvars(
            project=request.project, mr_iid=request.mr_iid, event_type="workflow.code_review"
        )
        logger.info("Code review workflow started", dry_run=request.dry_run)
        try:
            outcome = await self._run_review_pipeline(request)
        except WorkflowExecutionError as wfe:
            self._log_failure(wfe)
            raise
        except ProviderError as exc:
            self._log_failure(exc)
            raise WorkflowExecutionError(
                self._redact_error(self._describe_provider_error(exc)),
                context={"project": request.project, "mr_iid": request.mr_iid},
            ) from exc
        logger.info(
            "Code review workflow completed",
            feedback_count=len(outcome.result.feedback),
            overall_rating=outcome.result.overall_rating.value,
        )
        return outcome

    async def _run_review_pipeline(self, request: ReviewRequest) -> ReviewOutcome:
        """Execute the full review step sequence (happy path only)."""
        details = await self._step_1_fetch_merge_request(request)
        shas, existing, approvals = await self._step_2_fetch_review_context(details)
        changes = await self._step_3_fetch_diffs(details)
        try:
            self._ensure_has_changes(changes)
        except WorkflowHaltedException as halt:
            logger.info("Code review workflow halted gracefully", reason=str(halt))
            result = ReviewResult(summary=NO_CHANGES_SUMMARY, overall_rating=OverallRating.APPROVE)
            return ReviewOutcome(
                merge_request=details,
                result=result,
                shas=shas,
                existing_feedback=existing,
                approvals=approvals,
                dry_run=request.dry_run,
            )
        contents = await self._step_4_fetch_file_contents(details, shas, changes)
        rendered = self._step_5_render_code_section(changes, contents)
        analysis = await self._step_6_analyze(details, rendered, existing)
        self._step_7_resolve_positions(analysis.result.feedback, rendered, shas)
        report = await self._step_8_publish(request, details, analysis.result)
        return ReviewOutcome(
            merge_request=details,
            result=analysis.result,
            shas=shas,
            prompt=analysis.prompt,
            file_diffs=rendered.file_diffs,
            existing_feedback=existing,
            approvals=approvals,
            publish_report=report,
            dry_run=request.dry_run,
        )

    # ── Step Methods ──────────────────────────────────────────────────

    async def _step_1_fetch_merge_request(self, request: ReviewRequest) -> MergeRequestDetails:
        logger.info("Step 1: Fetching merge request details")
        details = await self._vcs.get_merge_request(request.project, request.mr_iid)
        bind_contextvars(project_id=details.project_id)
        logger.info("Merge request fetched", title=details.title, author=details.author_name)
        return details

    async def _step_2_fetch_review_context(
        self, details: MergeRequestDetails
    ) -> tuple[ShaTriple, list[FeedbackItem], dict[str, Any] | None]:
        """Fetch latest version, existing discussions and approvals concurrently."""
        logger.info("Step 2: Fetching versions, discussions and approvals")
        project_id, mr_iid = details.project_id, details.mr_iid
        shas, existing, approvals = await asyncio.gather(
            self._vcs.get_latest_version(project_id, mr_iid),
            self._safe_existing_feedback(project_id, mr_iid),
            self._safe_approvals(project_id, mr_iid),
        )
        logger.info(
            "Review context fetched",
            head_sha=shas.head_sha,
            existing_comments=len(existing),
            approvals_available=approvals is not None,
        )
        return shas, existing, approvals

    async def _step_3_fetch_diffs(self, details: MergeRequestDetails) -> list[RawFileChange]:
        logger.info("Step 3: Fetching merge request diffs")
        changes = await self._vcs.get_diffs(details.project_id, details.mr_iid)
        logger.info("Diffs fetched", file_changes=len(changes))
        return changes

    async def _step_4_fetch_file_contents(
        self, details: MergeRequestDetails, shas: ShaTriple, changes: list[RawFileChange]
    ) -> dict[str, str | None]:
        """Fetch post-change content of every surviving file, keyed by path."""
        ref = shas.head_sha or details.source_branch
        paths = list(dict.fromkeys(c.new_path for c in changes if not c.deleted_file))
        logger.info("Step 4: Fetching file contents", files=len(paths), ref=ref)
        contents = await asyncio.gather(
            *(self._safe_file_content(details.project_id, path, ref) for path in paths)
        )
        fetched = dict(zip(paths, contents, strict=True))
        logger.info(
            "File contents fetched",
            available=sum(1 for content in fetched.values() if content is not None),
        )
        return fetched

    def _step_5_render_code_section(
        self, changes: list[RawFileChange], contents: dict[str, str | None]
    ) -> DiffParseResult:
        logger.info("Step 5: Parsing diffs and rendering code section")
        rendered = parse_diffs_to_hunks(changes, contents, self._policy)
        logger.info(
            "Code section rendered",
            files=len(rendered.file_diffs),
            full_content_files=len(rendered.included_paths),
            prompt_chars=len(rendered.prompt_text),
        )
        return rendered

    async def _step_6_analyze(
        self,
        details: MergeRequestDetails,
        rendered: DiffParseResult,
        existing: list[FeedbackItem],
    ) -> AnalyzeCodeReviewOutput:
        logger.info("Step 6: Analyzing code via model")
        custom_instructions, strategy = self._resolve_custom_instructions(details)
        request = ReviewPromptRequest(
            title=details.title,
            description=details.description,
            author_name=details.author_name,
            source_branch=details.source_branch,
            target_branch=details.target_branch,
            diff_content=rendered.prompt_text,
            existing_feedback=tuple(existing),
            custom_instructions=custom_instructions,
            strategy=strategy,
            response_format=self._prompt_config.response_format,
        )
        try:
            analysis = await self._analyze.execute(request)
        except SkillExecutionError as exc:
            raise WorkflowExecutionError(
                self._redact_error(str(exc)), context={**exc.context, "step": "analyze"}
            ) from exc
        logger.info(
            "Code analysis completed",
            overall_rating=analysis.result.overall_rating.value,
            issues_count=len(analysis.result.feedback),
        )
        return analysis

    def _step_7_resolve_positions(
        self, feedback: list[FeedbackItem], rendered: DiffParseResult, shas: ShaTriple
    ) -> None:
        logger.info("Step 7: Resolving inline positions")
        resolve_positions(feedback, rendered.file_diffs, shas)

    async def _step_8_publish(
        self, request: ReviewRequest, details: MergeRequestDetails, result: ReviewResult
    ) -> PublishFeedbackReport | None:
        if request.dry_run:
            logger.info("Step 8: Dry run, skipping publication")
            return None
        logger.info("Step 8: Publishing feedback", items=len(result.feedback))
        summary = create_review_summary(result.feedback, result.overall_rating)
        return await self._publish.execute(
            PublishFeedbackInput(
                project_id=details.project_id,
                mr_iid=details.mr_iid,
                feedback=result.feedback,
                summary_note=f"{summary}\n\n{result.summary}".strip(),
            )
        )

    # ── Private Helpers ───────────────────────────────────────────────

    @staticmethod
    def _ensure_has_changes(changes: list[RawFileChange]) -> None:
        if not changes:
            raise WorkflowHaltedException("Merge request has no file changes")

    async def _safe_existing_feedback(self, project_id: str, mr_iid: str) -> list[FeedbackItem]:
        try:
            return await self._vcs.get_existing_feedback(project_id, mr_iid)
        except ProviderError as exc:
            logger.warning(
                "Discussions unavailable (non-fatal)",
                error_type="ProviderError",
                error_details=exc.message,
            )
            return []

    async def _safe_approvals(self, project_id: str, mr_iid: str) -> dict[str, Any] | None:
        try:
            return await self._vcs.get_approvals(project_id, mr_iid)
        except ProviderError as exc:
            logger.warning(
                "Approvals unavailable (non-fatal)",
                error_type="ProviderError",
                error_details=exc.message,
            )
            return None

    async def _safe_file_content(self, project_id: str, path: str, ref: str) -> str | None:
        try:
            return await self._vcs.get_file_content(project_id, path, ref)
        except ProviderError as exc:
            logger.warning(
                "File content unavailable, using diff only",
                file_path=path,
                error_type="ProviderError",
                error_details=exc.message,
            )
            return None

    def _resolve_custom_instructions(
        self, details: MergeRequestDetails
    ) -> tuple[str, PromptStrategy]:
        config = self._prompt_config
        match = resolve_project_prompt(
            details.project_path or details.project_id,
            config.project_prompts,
            config.default_prompt_file,
            config.default_strategy,
        )
        if match.match_kind != MatchKind.DEFAULT:
            logger.info(
                "Project prompt matched",
                matched_key=match.matched_key,
                match_kind=match.match_kind.value,
                strategy=match.strategy.value,
            )
        if not match.prompt_file:
            return "", match.strategy
        return self._read_prompt_file(match.prompt_file), match.strategy

    @staticmethod
    def _describe_provider_error(error: ProviderError) -> str:
        if error.status_code == 401:
            return f"Authentication failed ({error.provider}): check the access token"
        if error.status_code == 404:
            return f"Not found ({error.provider}): {error.message}"
        return f"Provider error ({error.provider}): {error.message}"

    def _log_failure(self, error: Exception) -> None:
        logger.error(
            "Code review workflow failed",
            processing_status="ERROR",
            error_type=type(error).__name__,
            error_details=self._redact_error(str(error)),
            error_retryable=isinstance(error, ProviderError) and error.retryable,
        )
