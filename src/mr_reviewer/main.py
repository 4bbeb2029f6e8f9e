from mr_reviewer.core.application.ports import BrainPort, VcsPort
from mr_reviewer.core.application.skills.review.analyze_code_review_skill import (
    AnalyzeCodeReviewSkill,
)
from mr_reviewer.core.application.skills.review.diff import ContentInclusionPolicy
from mr_reviewer.core.application.skills.review.publish_feedback_skill import (
    PublishFeedbackSkill,
)
from mr_reviewer.core.application.workflows.review import (
    CodeReviewWorkflow,
    ReviewOutcome,
    ReviewPromptConfig,
    ReviewRequest,
)
from mr_reviewer.infrastructure.configuration import Settings
from mr_reviewer.infrastructure.configuration.project_prompts_loader import (
    CustomPromptReader,
    load_project_prompts,
)
from mr_reviewer.infrastructure.observability import configure_logging, get_logger, redact_text
from mr_reviewer.infrastructure.tools.llm import build_brain
from mr_reviewer.infrastructure.tools.vcs.gitlab import (
    GitLabHttpClient,
    GitLabMergeRequestClient,
    parse_mr_url,
)


def build_workflow(settings: Settings, vcs: VcsPort, brain: BrainPort) -> CodeReviewWorkflow:
    prompt_config = ReviewPromptConfig(
        response_format=settings.response_format,
        default_prompt_file=settings.prompt_file,
        default_strategy=settings.prompt_strategy,
        project_prompts=load_project_prompts(settings.project_prompts_file),
    )
    return CodeReviewWorkflow(
        vcs=vcs,
        analyze=AnalyzeCodeReviewSkill(
            brain,
            timeout_seconds=settings.llm_timeout_seconds,
            min_description_length=settings.min_description_length,
        ),
        publish=PublishFeedbackSkill(vcs),
        policy=ContentInclusionPolicy(max_lines=settings.max_full_content_lines),
        prompt_config=prompt_config,
        read_prompt_file=CustomPromptReader().read,
        redact_error=redact_text,
    )


async def review_merge_request(
    mr_url: str,
    settings: Settings | None = None,
    dry_run: bool | None = None,
    brain: BrainPort | None = None,
) -> ReviewOutcome:
    """Review the merge request at *mr_url* end to end."""
    settings = settings or Settings()
    configure_logging()
    logger = get_logger("entrypoint")
    project_path, mr_iid = parse_mr_url(mr_url, settings.gitlab_base_url)
    request = ReviewRequest(
        project=project_path,
        mr_iid=mr_iid,
        dry_run=settings.dry_run if dry_run is None else dry_run,
    )
    logger.info(
        "Review requested",
        mr_url=mr_url,
        provider=settings.llm_provider.value,
        dry_run=request.dry_run,
    )
    async with GitLabHttpClient(settings) as http:
        vcs = GitLabMergeRequestClient(http)
        workflow = build_workflow(settings, vcs, brain or build_brain(settings))
        return await workflow.execute(request)
