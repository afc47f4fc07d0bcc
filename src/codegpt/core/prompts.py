"""Prompt templates for the four request actions."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from codegpt.core.config import Settings


class Action(Enum):
    """What the user wants done with the supplied text."""
    WRITE = "write"
    REFACTOR = "refactor"
    EXPLAIN = "explain"
    WALKTHROUGH = "walkthrough"

    @property
    def wraps_output(self) -> bool:
        """Prose answers are re-flowed to the terminal width."""
        return self in (Action.EXPLAIN, Action.WALKTHROUGH)


_PREAMBLE = "Don't start the sentence with as an AI language model."

PROMPT_TEMPLATES: Dict[Action, str] = {
    Action.WRITE: (
        "write {lang}, {body}. Don't write explanations or anything else other than code"
    ),
    Action.REFACTOR: "refactor this {lang} code: ```\n{body}```",
    Action.EXPLAIN: (
        _PREAMBLE + " As an expert in {lang}, explain this {lang} code: ```\n{body}```"
    ),
    Action.WALKTHROUGH: (
        _PREAMBLE
        + " As an expert in {lang}, walkthrough indepth step by step with"
        " explanations on what this {lang} code does: ```\n{body}```"
    ),
}


def build_prompt(action: Action, lang: str, body: str) -> str:
    """Interpolate the language and user text into the action's template."""
    return PROMPT_TEMPLATES[action].format(lang=lang, body=body)


@dataclass(frozen=True)
class Invocation:
    """A parsed command line: one per run."""
    action: Action
    body: str
    lang: str
    settings: Settings

    def prompt(self) -> str:
        return build_prompt(self.action, self.lang, self.body)
