import pytest
from pydantic import SecretStr

from mr_reviewer.core.domain.merge_request import RawFileChange, ShaTriple
from mr_reviewer.infrastructure.configuration import Settings

# One remove/add pair at line 12 and a pure add at new line 13; the same
# scenario with a trailing context line (header -10,6 +10,7) is in test_line_mapper.
SAMPLE_DIFF = (
    "@@ -10,5 +10,6 @@\n"
    " function test() {\n"
    '   console.log("hello");\n'
    "-  // old comment\n"
    "+  // new comment\n"
    '+  console.log("world");\n'
    "   return true;\n"
    " }\n"
)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        gitlab_base_url="https://gitlab.example.com",
        gitlab_token=SecretStr("glpat-mock-token"),
        anthropic_api_key=SecretStr("sk-ant-mock"),
        llm_timeout_seconds=5.0,
        llm_max_attempts=1,
        project_prompts_file=None,
        prompt_file=None,
        dry_run=False,
    )


@pytest.fixture
def sample_diff() -> str:
    return SAMPLE_DIFF


@pytest.fixture
def sample_change(sample_diff) -> RawFileChange:
    return RawFileChange(old_path="src/app.js", new_path="src/app.js", diff=sample_diff)


@pytest.fixture
def shas() -> ShaTriple:
    return ShaTriple(base_sha="base111", start_sha="start222", head_sha="head333")
