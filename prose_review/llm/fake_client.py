from typing import Any, AsyncIterator

from prose_review.llm.llm_client import LLMClient

FAKE_REPORT = """The text reads well overall; a few small grammar issues.

---
ISSUE 1
EXCERPT: "The cat sat on mat"
CATEGORY: grammar
SEVERITY: high
PROBLEM: Missing article before "mat"
FIX: "The cat sat on the mat"
"""


class FakeLLMClient(LLMClient):
    def __init__(self, report: str = FAKE_REPORT, chars_per_chunk: int = 7):
        self.report = report
        self.chars_per_chunk = chars_per_chunk

    async def stream(
        self, system_prompt: str, user_prompt: str, **kwargs: Any
    ) -> AsyncIterator[str]:
        # Völlig deterministischer Report, in festen Stücken gestreamt.
        for i in range(0, len(self.report), self.chars_per_chunk):
            yield self.report[i : i + self.chars_per_chunk]
