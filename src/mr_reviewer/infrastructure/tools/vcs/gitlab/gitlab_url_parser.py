from urllib.parse import urlparse

from mr_reviewer.core.application.exceptions import WorkflowExecutionError

_MR_SEGMENT = "/-/merge_requests/"


def parse_mr_url(mr_url: str, gitlab_base_url: str | None = None) -> tuple[str, str]:
    """Split a merge request web URL into ``(project_path, mr_iid)``.

    Accepts ``https://host/group/sub/project/-/merge_requests/42`` with any
    trailing tab (``/diffs``, ``#note_1``). When *gitlab_base_url* is given
    the host must match it.
    """
    parsed = urlparse((mr_url or "").strip())
    context = {"mr_url": mr_url}
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise WorkflowExecutionError(f"Not a merge request URL: {mr_url!r}", context=context)

    if gitlab_base_url:
        expected = urlparse(gitlab_base_url)
        if expected.hostname and expected.hostname != parsed.hostname:
            raise WorkflowExecutionError(
                f"Merge request host {parsed.hostname} does not match {expected.hostname}",
                context=context,
            )

    path = parsed.path
    if _MR_SEGMENT not in path:
        raise WorkflowExecutionError(f"Not a merge request URL: {mr_url!r}", context=context)

    project_part, mr_part = path.split(_MR_SEGMENT, 1)
    base_path = urlparse(gitlab_base_url).path.rstrip("/") if gitlab_base_url else ""
    if base_path and project_part.startswith(f"{base_path}/"):
        project_part = project_part[len(base_path) :]
    project_path = project_part.strip("/")
    mr_iid = mr_part.split("/", 1)[0]

    if not project_path or not mr_iid.isdigit():
        raise WorkflowExecutionError(
            f"Could not extract project and MR number from {mr_url!r}", context=context
        )
    return project_path, mr_iid
