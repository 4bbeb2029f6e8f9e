from dataclasses import dataclass


@dataclass(frozen=True)
class ShaTriple:
    """SHAs of the latest MR diff version; every inline position needs all three."""

    base_sha: str
    start_sha: str
    head_sha: str


@dataclass(frozen=True)
class MergeRequestDetails:
    project_id: str
    mr_iid: str
    title: str
    description: str
    author_name: str
    source_branch: str
    target_branch: str
    web_url: str = ""
    project_path: str = ""
