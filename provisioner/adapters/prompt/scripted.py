"""
Scripted prompter — fixed answers for unattended runs and tests.

Answers are looked up by question key; anything not scripted takes the
question's default, exactly as pressing Enter at the terminal would.
"""

from __future__ import annotations

from collections.abc import Mapping

from provisioner.adapters.prompt.base import Prompter
from provisioner.core.models.question import Question


class ScriptedPrompter(Prompter):
    def __init__(self, answers: Mapping[str, bool | str] | None = None):
        self._answers = dict(answers or {})
        self.asked: list[str] = []

    def confirm(self, question: Question) -> bool:
        self.asked.append(question.key)
        return bool(self._answers.get(question.key, question.default))

    def text(self, question: Question) -> str:
        self.asked.append(question.key)
        return str(self._answers.get(question.key, "")).strip()
