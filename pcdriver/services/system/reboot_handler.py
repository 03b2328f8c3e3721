"""
Reboot Handler

Issues the OS restart command for the Reboot service.

Exactly two platforms are supported:
- Windows: `shutdown -r -t <timeout>`
- Linux: `reboot`

Any other platform is a no-op that reports UNSUPPORTED_PLATFORM.
"""

import subprocess
import sys
from typing import Callable

from pcdriver.common.logging_setup import get_service_logger

logger = get_service_logger("system.reboot")

# Returned when this platform has no restart command
UNSUPPORTED_PLATFORM = -1

# Returned when the command was issued but no process handle came back
NO_PROCESS = 0


class RebootHandler:
    """Spawns the platform restart command and reports its process id"""

    def __init__(
        self,
        platform_name: str | None = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ):
        self.platform_name = platform_name or sys.platform
        self._popen = popen

    def build_command(self, timeout: int) -> list[str] | None:
        """Get the restart command line for this platform, None if unsupported"""
        if self.platform_name == "win32":
            return ["shutdown", "-r", "-t", str(timeout)]
        if self.platform_name.startswith("linux"):
            return ["reboot"]
        return None

    def reboot(self, timeout: int = 0) -> int:
        """
        Restart the machine.

        Args:
            timeout: Seconds before restart (only honored on Windows)

        Returns:
            Spawned process id, NO_PROCESS if spawning failed,
            UNSUPPORTED_PLATFORM on any other platform
        """
        command = self.build_command(timeout)
        if command is None:
            logger.warning(
                f"Reboot not supported on platform {self.platform_name}",
                extra={"platform": self.platform_name},
            )
            return UNSUPPORTED_PLATFORM

        logger.warning(
            f"Initiating system reboot: {' '.join(command)}",
            extra={"platform": self.platform_name, "timeout": timeout},
        )

        try:
            process = self._popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.error(f"Reboot command failed: {e}")
            return NO_PROCESS

        pid = getattr(process, "pid", None)
        return pid if pid else NO_PROCESS
