from mr_reviewer.core.domain.merge_request.merge_request_details import (
    MergeRequestDetails,
    ShaTriple,
)
from mr_reviewer.core.domain.merge_request.raw_file_change import RawFileChange

__all__ = ["MergeRequestDetails", "RawFileChange", "ShaTriple"]
