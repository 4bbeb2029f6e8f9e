from mr_reviewer.core.application.ports.brain_port import BrainPort
from mr_reviewer.core.application.ports.post_result import Posted, PostResult, Rejected
from mr_reviewer.core.application.ports.vcs_port import VcsPort

__all__ = ["BrainPort", "PostResult", "Posted", "Rejected", "VcsPort"]
