"""
Prompter base — the I/O side of every interactive decision.

Stages decide *which* question to ask and what an answer means; a
Prompter only fetches the raw answer. Swapping the console prompter
for a scripted one makes the whole workflow non-interactive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from provisioner.core.data.questions import get_question
from provisioner.core.models.question import Question


class Prompter(ABC):
    """Abstract answer source."""

    @abstractmethod
    def confirm(self, question: Question) -> bool:
        """Yes/no answer; an empty reply means ``question.default``."""

    @abstractmethod
    def text(self, question: Question) -> str:
        """Free-text answer, stripped; ``""`` means "use the default"."""

    def ask(self, key: str) -> bool | str:
        """Ask the catalog question ``key``, dispatching on its kind."""
        question = get_question(key)
        if question.kind == "confirm":
            return self.confirm(question)
        return self.text(question)
