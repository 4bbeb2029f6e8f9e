from dataclasses import dataclass


@dataclass(frozen=True)
class RawFileChange:
    """One entry of the GitLab MR diff listing, before hunk parsing."""

    old_path: str
    new_path: str
    diff: str
    new_file: bool = False
    deleted_file: bool = False
    renamed_file: bool = False
