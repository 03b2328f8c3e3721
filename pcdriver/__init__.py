"""
PC Driver

IoT driver exposing the local computer's metrics as points, voice
broadcast and reboot as services, and a thing specification describing
both.
"""

from pcdriver.common.config import DRIVER_VERSION as __version__
from pcdriver.services.driver import PCDriver, ThingSpec

__all__ = ["PCDriver", "ThingSpec", "__version__"]
