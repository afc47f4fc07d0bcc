"""codegpt terminal output."""

from codegpt.ui.console import CodegptConsole

__all__ = ["CodegptConsole"]
