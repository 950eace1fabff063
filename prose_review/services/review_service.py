import os
from typing import AsyncIterator, Callable

from prose_review.core.config import settings
from prose_review.llm.fake_client import FakeLLMClient
from prose_review.llm.llm_client import LLMClient
from prose_review.llm.openai_client import OpenAIClient
from prose_review.models.pydantic import ReviewRequest, ReviewResponse
from prose_review.services.diagnostics.assignment import ReviewState
from prose_review.services.diagnostics.dictionary import UserDictionary
from prose_review.services.prompts import build_review_prompt, build_user_prompt
from prose_review.services.review_session import ReviewSession

# Wenn TEST_MODE=1 in der Umgebung gesetzt ist,
# wird kein echtes LLM aufgerufen.
TEST_MODE = os.getenv("TEST_MODE") == "1"


async def replay_fragments(text: str, chunk_size: int) -> AsyncIterator[str]:
    """Spielt einen fertigen Report als Fragment-Stream ein."""
    chunk_size = max(1, chunk_size)
    for i in range(0, len(text), chunk_size):
        yield text[i : i + chunk_size]


class ReviewService:
    def __init__(self, llm_client: LLMClient | None = None) -> None:
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        # erst beim ersten LLM-Call instanziieren (OPENAI_API_KEY wird dann gelesen)
        if self._llm_client is None:
            if TEST_MODE:
                self._llm_client = FakeLLMClient()
            else:
                self._llm_client = OpenAIClient(
                    model_name=settings.llm_model,
                    temperature=settings.llm_temperature,
                    max_tokens=settings.llm_max_tokens,
                )
        return self._llm_client

    async def review(
        self,
        req: ReviewRequest,
        should_abort: Callable[[], bool] = lambda: False,
    ) -> ReviewResponse:
        state = ReviewState(
            hint_only_categories=settings.hint_only_categories,
            max_rewrite_length=settings.quick_fix_max_length,
        )
        dictionary = UserDictionary([*settings.user_dictionary, *req.dictionary])
        session = ReviewSession(req.document_text, state=state, dictionary=dictionary)

        # 1. Fragment-Quelle wählen: eingespielter Report oder LLM-Stream
        if req.report_text is not None:
            fragments = replay_fragments(req.report_text, settings.replay_chunk_size)
        else:
            kwargs = {"model": req.llm_model} if req.llm_model else {}
            fragments = self.llm_client.stream(
                build_review_prompt(),
                build_user_prompt(req.document_text),
                **kwargs,
            )

        # 2. Stream verarbeiten
        outcome = await session.run(fragments, should_abort)

        return ReviewResponse(
            status=outcome.status,
            summary=outcome.summary,
            diagnostics=outcome.diagnostics,
            num_quick_fixes=sum(1 for d in outcome.diagnostics if d.quick_fix),
            num_unlocated=sum(1 for d in outcome.diagnostics if not d.span.located),
        )
