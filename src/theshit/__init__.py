"""The Shit - corrects the previous failed shell command."""

__version__ = "1.0.0"

# Lazy imports keep `theshit --version` from touching the rule catalog
def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name == "Command":
        from theshit.rules.base import Command
        return Command
    elif name == "Rule":
        from theshit.rules.base import Rule
        return Rule
    elif name == "Dispatcher":
        from theshit.rules.dispatcher import Dispatcher
        return Dispatcher
    elif name == "ExecutableIndex":
        from theshit.fuzzy.index import ExecutableIndex
        return ExecutableIndex
    elif name == "FuzzyMatcher":
        from theshit.fuzzy.matcher import FuzzyMatcher
        return FuzzyMatcher
    elif name == "Settings":
        from theshit.config import Settings
        return Settings
    elif name == "Corrector":
        from theshit.core import Corrector
        return Corrector
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "Command",
    "Rule",
    "Dispatcher",
    "ExecutableIndex",
    "FuzzyMatcher",
    "Settings",
    "Corrector",
]
