"""
Question model — one interactive decision point.

Questions are data: the stage that needs an answer names a key, the
prompt adapter decides how to obtain it (terminal, answers file,
defaults). ``default`` is what an empty answer means.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    text: str
    kind: Literal["confirm", "text"] = "text"
    default: bool | str = ""
    default_label: str = ""     # shown instead of ``default`` (e.g. "auto-generate")
    secret: bool = False

    @property
    def display_default(self) -> str:
        if self.default_label:
            return self.default_label
        if self.kind == "confirm":
            return "y" if self.default else "n"
        return str(self.default)
