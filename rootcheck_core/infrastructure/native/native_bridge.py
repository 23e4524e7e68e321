"""
Native deeper-scan bridge.

Native checks are harder to cloak than anything done from Python, so the
deepest binary scan is delegated to a small shared library. The library is
an unreliable capability: it may be missing, fail to load, or load but fail
to link a symbol at call time. Every one of those outcomes is reported as
"no evidence", never as an error.

Expected exports:

    int  checkForRoot(const char **paths, int count);   /* hit count */
    void setLogDebugMessages(int enabled);
"""

import ctypes
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union


class NativeUnavailableError(Exception):
    """The native library failed to load, or a symbol failed to link."""
    pass


class NativeBridge(ABC):
    """Capability interface for the native scanner."""

    @abstractmethod
    def is_loaded(self) -> bool:
        """Whether the native component loaded on this host."""
        pass

    @abstractmethod
    def deep_scan(self, candidate_paths: Sequence[str], log_debug_messages: bool = False) -> int:
        """
        Scan full binary paths natively.

        Args:
            candidate_paths: Full paths of the binaries to look for
            log_debug_messages: Whether the library logs this call

        Returns:
            Number of candidates the native code considers present

        Raises:
            NativeUnavailableError: the scan symbol could not be linked
        """
        pass

    @abstractmethod
    def probe_read_access(self, log_debug_messages: bool = False) -> bool:
        """Whether the library itself can be read and called into."""
        pass


class UnavailableNativeBridge(NativeBridge):
    """Bridge variant used when no native library could be loaded."""

    def __init__(self, reason: str = "native library not configured"):
        self.reason = reason

    def is_loaded(self) -> bool:
        return False

    def deep_scan(self, candidate_paths, log_debug_messages=False):
        raise NativeUnavailableError(self.reason)

    def probe_read_access(self, log_debug_messages=False):
        return False


class CtypesNativeBridge(NativeBridge):
    """Bridge backed by a shared library loaded with ctypes."""

    def __init__(self, library_path: Union[str, Path], library: ctypes.CDLL):
        self.library_path = Path(library_path)
        self._library = library
        self.logger = logging.getLogger("native.bridge")

    def is_loaded(self) -> bool:
        return True

    def _set_log_debug_messages(self, enabled: bool) -> None:
        try:
            set_logging = self._library.setLogDebugMessages
        except AttributeError as e:
            raise NativeUnavailableError(f"setLogDebugMessages not linkable: {e}") from e
        set_logging.argtypes = [ctypes.c_int]
        set_logging.restype = None
        set_logging(1 if enabled else 0)

    def deep_scan(self, candidate_paths: Sequence[str], log_debug_messages: bool = False) -> int:
        self._set_log_debug_messages(log_debug_messages)
        try:
            check_for_root = self._library.checkForRoot
        except AttributeError as e:
            raise NativeUnavailableError(f"checkForRoot not linkable: {e}") from e

        check_for_root.argtypes = [ctypes.POINTER(ctypes.c_char_p), ctypes.c_int]
        check_for_root.restype = ctypes.c_int

        encoded = [path.encode('utf-8') for path in candidate_paths]
        path_array = (ctypes.c_char_p * len(encoded))(*encoded)
        return int(check_for_root(path_array, len(encoded)))

    def probe_read_access(self, log_debug_messages: bool = False) -> bool:
        """
        Root cloaks block read access to native libraries while still
        letting them load into memory. Reading the file back and calling a
        trivial export detects that combination.
        """
        try:
            with open(self.library_path, 'rb') as f:
                f.read(1)
            self._set_log_debug_messages(log_debug_messages)
            return True
        except (OSError, NativeUnavailableError) as e:
            self.logger.debug(f"Read access to {self.library_path} denied: {e}")
            return False


def load_native_bridge(library_path: Optional[Union[str, Path]]) -> NativeBridge:
    """
    Load the native scanner, falling back to the unavailable variant.

    Args:
        library_path: Path to the shared library, or None when not configured

    Returns:
        CtypesNativeBridge when the library loads, UnavailableNativeBridge otherwise
    """
    logger = logging.getLogger("native.bridge")

    if not library_path:
        return UnavailableNativeBridge()

    try:
        library = ctypes.CDLL(str(library_path))
    except OSError as e:
        logger.info(f"Could not load native library {library_path}: {e}")
        return UnavailableNativeBridge(f"load failed: {e}")

    logger.info(f"Loaded native library: {library_path}")
    return CtypesNativeBridge(library_path, library)
