"""
Process invocation for inspection commands (getprop, mount, which).
"""

from .process_invoker import (
    ProcessInvoker,
    LocalProcessInvoker,
    AdbShellInvoker,
    InvocationError,
    SpawnFailedError,
    EmptyOutputError,
    InvocationTimeoutError,
)

__all__ = [
    'ProcessInvoker',
    'LocalProcessInvoker',
    'AdbShellInvoker',
    'InvocationError',
    'SpawnFailedError',
    'EmptyOutputError',
    'InvocationTimeoutError',
]
