"""Command routing runtime.

Exports:
    Dispatcher: Ordered command table that parses and dispatches input
    CommandBinding: Prefix rule, argument rule and handler of one command
    DispatchOutcome: What happened to one command string
"""

from .dispatcher import CommandBinding, DispatchOutcome, Dispatcher, Handler

__all__ = ["CommandBinding", "DispatchOutcome", "Dispatcher", "Handler"]
