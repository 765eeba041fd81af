"""Shell adapters."""

from mcdr_setup.adapters.shell.command import ShellCommandAdapter

__all__ = ["ShellCommandAdapter"]
