"""
Native deeper-scan bridge.
"""

from .native_bridge import (
    NativeBridge,
    NativeUnavailableError,
    UnavailableNativeBridge,
    CtypesNativeBridge,
    load_native_bridge,
)

__all__ = [
    'NativeBridge',
    'NativeUnavailableError',
    'UnavailableNativeBridge',
    'CtypesNativeBridge',
    'load_native_bridge',
]
