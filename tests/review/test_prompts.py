from prose_review.services.prompts import build_review_prompt, build_user_prompt
from prose_review.services.parsing.fields import FIELD_ORDER


def test_review_prompt_describes_wire_format():
    prompt = build_review_prompt()

    assert "---\nISSUE <n>" in prompt
    for name in FIELD_ORDER:
        assert f"{name}:" in prompt
    assert "high|moderate|low" in prompt


def test_user_prompt_contains_document():
    assert build_user_prompt("The cat sat on mat.").endswith("The cat sat on mat.")
