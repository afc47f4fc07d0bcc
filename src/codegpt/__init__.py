"""
codegpt - ask a chat-completion API to write, refactor or explain code.

Each run builds one prompt from a template, sends one request and prints
the answer. Nothing is kept between runs.

Usage:
    codegpt write "a function that adds two numbers" --lang python
    codegpt refactor "$(cat main.go)" --lang go
    codegpt explain "$(cat lib.rs)" --lang rust
    codegpt walkthrough "$(cat app.js)" --lang javascript
"""

__version__ = "0.1.0"
