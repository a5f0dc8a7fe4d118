from rich.console import Console

console = Console(stderr=True, soft_wrap=True)
"""Diagnostics go to stderr, generated code goes to stdout."""
