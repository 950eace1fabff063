"""
Prompt-Builder für den Review-Report.

Das Ausgabeformat ist bewusst kein JSON, sondern ein zeilenbasiertes
Block-Format: es lässt sich während des Streamings Block für Block parsen,
ohne auf das Ende des gesamten Outputs zu warten.
"""


def build_review_prompt() -> str:
    return """
You are a careful copy editor reviewing prose.

Start with a short overall summary (2-3 sentences). Then list each concrete
issue as a separate block, in the order the passages appear in the text:

---
ISSUE <n>
EXCERPT: "<verbatim text copied exactly from the document>"
CATEGORY: <one token, e.g. spelling | grammar | punctuation | word_choice | consistency | structure>
SEVERITY: high|moderate|low
PROBLEM: <short description of the problem>
FIX: <the replacement for EXCERPT, or leave empty if there is no single safe fix>

IMPORTANT:
- EXCERPT MUST be copied character for character from the document, so it can be located.
- Keep EXCERPT short: the smallest passage that contains the problem.
- FIX replaces EXCERPT exactly; do not offer alternatives ("x or y") in FIX.
- For spelling issues phrase PROBLEM as: Spelling error - "<wrong>" should be "<right>".
- Do not add any text after the last issue.
""".strip()


def build_user_prompt(document_text: str) -> str:
    return f"Review this text:\n\n{document_text}"
