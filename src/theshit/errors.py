"""Exceptions raised outside the correction engine."""


class TheShitError(Exception):
    """Base error for the command-line front end."""


class NoCommandError(TheShitError):
    """No previous command could be recovered from shell history."""
