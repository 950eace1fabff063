"""
Benutzer-Wörterbuch für Spelling-Issues.

Das LLM bekommt das Wörterbuch nicht zu sehen; es entscheidet aus dem
Kontext. Stattdessen werden Spelling-Issues für Wörter, die der Benutzer
explizit freigegeben hat, clientseitig vor der Zuweisung verworfen.

Die Persistenz des Wörterbuchs ist nicht Teil dieses Moduls.
"""

import re
from typing import Iterable

from prose_review.services.parsing.issue_models import IssueSuggestion

# 'Spelling error - "fabic" should be "fabric"'
_SPELLING_ERROR_RE = re.compile(r'Spelling error[^"]*"([^"]+)"')
# 'Misspelling of "fabic"'
_MISSPELLING_OF_RE = re.compile(r"""Misspelling of ["']?([^"']+)["']?""")
# '"fabic" should be ...'
_LEADING_WORD_RE = re.compile(r"""^["']([^"']+)["'] should be""")


def extract_misspelled_word(comment: str) -> str | None:
    """
    Holt das falsch geschriebene Wort aus dem PROBLEM-Text.

    Wrong-Word-Formulierungen ('should be "losing" not "loosing"') liefern
    bewusst None: dort ist das Wort korrekt geschrieben, nur falsch gewählt.
    """
    match = _SPELLING_ERROR_RE.search(comment)
    if match:
        return match.group(1)

    match = _MISSPELLING_OF_RE.search(comment)
    if match:
        return match.group(1).strip()

    match = _LEADING_WORD_RE.search(comment)
    if match:
        return match.group(1)

    return None


def is_spelling_error(suggestion: IssueSuggestion) -> bool:
    comment = suggestion.comment

    has_spelling_language = "Spelling error" in comment or "Misspelling" in comment
    is_spelling_category = suggestion.category == "spelling"
    is_wrong_word = (
        "Wrong word" in comment or "Wrong homophone" in comment or "homophone" in comment
    )

    return (has_spelling_language or is_spelling_category) and not is_wrong_word


class UserDictionary:
    """In-Memory-Wörterbuch (Reihenfolge bleibt erhalten, keine Duplikate)."""

    def __init__(self, words: Iterable[str] | None = None):
        self.words: list[str] = []
        for word in words or ():
            self.add(word)

    def __contains__(self, word: str) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)

    def add(self, word: str) -> bool:
        """Returns True, wenn das Wort neu aufgenommen wurde."""
        word = word.strip()
        if not word or word in self.words:
            return False
        self.words.append(word)
        return True

    def suppresses(self, suggestion: IssueSuggestion) -> bool:
        """True, wenn ein Spelling-Issue ein freigegebenes Wort betrifft."""
        if not self.words or suggestion.category != "spelling":
            return False
        word = extract_misspelled_word(suggestion.comment)
        return word is not None and word in self
