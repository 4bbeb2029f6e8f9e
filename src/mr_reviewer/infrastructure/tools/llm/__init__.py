from mr_reviewer.infrastructure.tools.llm.anthropic_brain_adapter import AnthropicBrainAdapter
from mr_reviewer.infrastructure.tools.llm.brain_adapter_factory import build_brain
from mr_reviewer.infrastructure.tools.llm.openai_brain_adapter import OpenAiBrainAdapter

__all__ = ["AnthropicBrainAdapter", "OpenAiBrainAdapter", "build_brain"]
