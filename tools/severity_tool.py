from typing import Iterable, List, Optional

from schemas.log_schemas import LogLevel

FIRST_PARTY_MARKER = "/src/app/"


class SeverityClassifier:
    """
    Decides whether a captured error is shipped as a Warning or an Error.

    Errors default to Warning. A trace that passes through first-party code
    (contains ``first_party_marker``) is an Error, unless it also contains one
    of the allow-listed sentences, which always forces Warning.
    """

    def __init__(self, warning_sentences: Optional[Iterable[str]] = None, first_party_marker: str = FIRST_PARTY_MARKER):
        self.first_party_marker = first_party_marker
        self._warning_sentences: List[str] = list(warning_sentences or [])

    @property
    def warning_sentences(self) -> List[str]:
        return list(self._warning_sentences)

    def add_warning_sentence(self, sentence: str) -> None:
        self._warning_sentences.append(sentence)

    def is_warning(self, trace_text: str) -> bool:
        is_warning = True
        if self.first_party_marker and self.first_party_marker in trace_text:
            is_warning = False

        # Allow-list wins over the first-party check.
        if any(sentence in trace_text for sentence in self._warning_sentences):
            is_warning = True

        return is_warning

    def classify(self, trace_text: str) -> LogLevel:
        return LogLevel.WARNING if self.is_warning(trace_text) else LogLevel.ERROR
