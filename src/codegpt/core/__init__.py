"""codegpt core modules."""

from codegpt.core.config import Settings, load_config, load_settings, get_config_path
from codegpt.core.formatting import double_newlines, format_as_comment, wrap_for_display
from codegpt.core.prompts import Action, Invocation, build_prompt

__all__ = [
    "Settings",
    "load_config",
    "load_settings",
    "get_config_path",
    "double_newlines",
    "format_as_comment",
    "wrap_for_display",
    "Action",
    "Invocation",
    "build_prompt",
]
