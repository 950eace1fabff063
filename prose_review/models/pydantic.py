from typing import List, Optional, Literal

from pydantic import BaseModel, Field

DisplaySeverity = Literal["error", "warning", "information", "hint"]
ReviewStatus = Literal["completed", "aborted"]


class LocatedSpan(BaseModel):
    """
    Position eines Excerpts im Referenzdokument.

    Genau einer von drei Fällen:
    - "exact": exakter Substring-Treffer
    - "fuzzy": Präfix/Suffix-Treffer (Länge kann vom Excerpt abweichen)
    - "unlocated": kein Treffer, Platzhalter (0, 0) am Dokumentanfang
    """
    kind: Literal["exact", "fuzzy", "unlocated"]
    start_char: int
    end_char: int

    @property
    def located(self) -> bool:
        return self.kind != "unlocated"


class AssignedDiagnostic(BaseModel):
    """
    Ein lokalisiertes Issue inkl. Darstellungs-Entscheidung.

    diagnostic_id ist nur für Quick-Fix-fähige Diagnostics gesetzt
    (fortlaufend "1", "2", ... pro Review).
    """
    diagnostic_id: Optional[str] = None
    span: LocatedSpan
    display_severity: DisplaySeverity
    quick_fix: bool = False
    # True, wenn der Bereich einen bereits vergebenen Quick-Fix-Bereich schneidet
    overlaps_committed: bool = False

    message: str
    category: str
    severity: Literal["high", "moderate", "low"]
    target_excerpt: str
    rewrite: str = ""


class ReviewRequest(BaseModel):
    """
    Request-Body für den /review-Endpoint.

    Ist report_text gesetzt, wird dieser Report (fragmentiert) eingespielt,
    statt das LLM aufzurufen.
    """
    document_text: str
    report_text: Optional[str] = None
    llm_model: Optional[str] = None
    dictionary: List[str] = Field(default_factory=list)


class ReviewResponse(BaseModel):
    """
    Response-Body für den /review-Endpoint.
    """
    status: ReviewStatus
    summary: str
    diagnostics: List[AssignedDiagnostic] = Field(default_factory=list)
    num_quick_fixes: int = 0
    num_unlocated: int = 0
