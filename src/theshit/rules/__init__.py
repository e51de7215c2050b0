"""Correction rules and the dispatcher that picks which one fires."""

from .base import Command, Rule
from .dispatcher import Dispatcher

__all__ = ["Command", "Rule", "Dispatcher"]
