from abc import ABC, abstractmethod


class BrainPort(ABC):
    """Port for a language model that turns a prompt into text.

    Implementations MUST raise ProviderError on vendor failures
    (rate limits, auth, timeouts) after their own retry budget is spent.
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send the fully-assembled prompt and return the raw completion text."""
