"""Adapters — bindings to host processes.

Public re-exports for convenient access.
"""

from mcdr_setup.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "ShellCommandAdapter",
]
