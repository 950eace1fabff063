from abc import ABC, abstractmethod
from typing import Any, AsyncIterator


class LLMClient(ABC):
    @abstractmethod
    def stream(self, system_prompt: str, user_prompt: str, **kwargs: Any) -> AsyncIterator[str]:
        """Sendet Prompt an ein LLM und liefert den Text-Output fragmentweise."""
        raise NotImplementedError
