"""Tests for prompt templates."""

from __future__ import annotations

import pytest

from codegpt.core.config import Settings
from codegpt.core.prompts import PROMPT_TEMPLATES, Action, Invocation, build_prompt


def test_write_prompt():
    assert build_prompt(Action.WRITE, "python", "a function that adds two numbers") == (
        "write python, a function that adds two numbers. "
        "Don't write explanations or anything else other than code"
    )


def test_refactor_prompt():
    assert build_prompt(Action.REFACTOR, "go", "func f(){}") == "refactor this go code: ```\nfunc f(){}```"


def test_explain_prompt():
    assert build_prompt(Action.EXPLAIN, "rust", "fn main() {}") == (
        "Don't start the sentence with as an AI language model. "
        "As an expert in rust, explain this rust code: ```\nfn main() {}```"
    )


def test_walkthrough_prompt():
    assert build_prompt(Action.WALKTHROUGH, "c", "int x;") == (
        "Don't start the sentence with as an AI language model. "
        "As an expert in c, walkthrough indepth step by step with explanations "
        "on what this c code does: ```\nint x;```"
    )


def test_every_action_has_a_template():
    assert set(PROMPT_TEMPLATES) == set(Action)


def test_braces_in_user_text_are_kept():
    """User code is interpolated once, not treated as a format string."""
    body = "fn main() { println!(\"{}\", 1); }"
    assert build_prompt(Action.REFACTOR, "rust", body).endswith(f"```\n{body}```")


@pytest.mark.parametrize("action", list(Action))
def test_build_prompt_is_deterministic(action):
    assert build_prompt(action, "lua", "print(1)") == build_prompt(action, "lua", "print(1)")


def test_only_prose_actions_wrap_output():
    assert [a for a in Action if a.wraps_output] == [Action.EXPLAIN, Action.WALKTHROUGH]


def test_invocation_prompt_uses_action_and_lang():
    invocation = Invocation(
        action=Action.WRITE,
        body="hello world",
        lang="ruby",
        settings=Settings(api_key="sk-test"),
    )
    assert invocation.prompt() == build_prompt(Action.WRITE, "ruby", "hello world")
