from mr_reviewer.infrastructure.observability.logging.review_schema_processor import (
    review_schema_processor,
)


class TestReviewSchemaProcessor:
    def test_nests_known_fields(self) -> None:
        event = {
            "event": "Code review workflow failed",
            "level": "error",
            "timestamp": "2026-01-01T00:00:00Z",
            "context_component": "workflow",
            "project": "acme/web",
            "mr_iid": "7",
            "event_type": "workflow.code_review",
            "processing_status": "ERROR",
            "error_type": "ProviderError",
            "error_details": "gitlab: 502",
            "error_retryable": True,
            "files": 3,
        }

        result = review_schema_processor(None, "error", event)

        assert result["message"] == "Code review workflow failed"
        assert result["level"] == "error"
        assert result["component"] == "workflow"
        assert result["review"] == {
            "project": "acme/web",
            "mr_iid": "7",
            "event_type": "workflow.code_review",
        }
        assert result["processing"] == {"status": "ERROR", "duration_ms": None}
        assert result["error"] == {
            "type": "ProviderError",
            "details": "gitlab: 502",
            "retryable": True,
        }
        assert result["extra"] == {"files": 3}

    def test_minimal_event(self) -> None:
        result = review_schema_processor(None, "info", {"event": "hello"})
        assert result["message"] == "hello"
        assert result["level"] == "info"
        for block in ("review", "processing", "error", "extra", "component"):
            assert block not in result
