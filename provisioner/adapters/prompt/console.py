"""
Console prompter — blocking terminal prompts via click.

There is no timeout on any prompt; the operator can always interrupt
with Ctrl-C.
"""

from __future__ import annotations

import click

from provisioner.adapters.prompt.base import Prompter
from provisioner.core.models.question import Question


class ConsolePrompter(Prompter):
    def confirm(self, question: Question) -> bool:
        return click.confirm(question.text, default=bool(question.default))

    def text(self, question: Question) -> str:
        label = f"{question.text} [default: {question.display_default}]"
        answer = click.prompt(
            label, default="", show_default=False, hide_input=question.secret,
        )
        return str(answer).strip()
