"""
Locating su through the host shell.

A weaker corroborating signal than direct probing: it only asks the shell
(`which su`) whether su resolves on its PATH.
"""

from rootcheck_core.logic.models import SignalResult
from ..base import BaseCheck


class SuLocator(BaseCheck):
    """Runs the locate command and looks for any output at all."""

    @property
    def name(self) -> str:
        return "su_exists"

    @property
    def description(self) -> str:
        return "Asks the host shell to locate the su binary"

    def check_su_exists(self) -> SignalResult:
        """
        Raises:
            InvocationError: the locate command could not run or printed nothing
        """
        lines = self.host.invoker.run(self.config.locate_su_command)

        located = lines[0].strip() or '<blank>'
        self.emit(f"su located at {located}")
        return SignalResult(positive=True, evidence=[located])
