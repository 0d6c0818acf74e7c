"""
Development aid: lets a project make the listener wait until a debugger has been attached to the process.
"""

import asyncio
import os
import sys
from collections.abc import Callable

from sensai.util import logging

from razorsnap.constants import DEBUG_RAZOR_PLUGIN_PROPERTY_NAME
from razorsnap.project import ProjectPropertyView

log = logging.getLogger(__name__)


def is_debugger_attached() -> bool:
    return sys.gettrace() is not None


def is_debug_requested(project_instance: ProjectPropertyView) -> bool:
    return project_instance.get_property_value(DEBUG_RAZOR_PLUGIN_PROPERTY_NAME).lower() == "true"


class DebuggerWaitHook:
    """
    Waits for a debugger to attach if the project requests it and the hook is enabled (which it is not by default).
    """

    def __init__(self, enabled: bool = False, poll_interval: float = 1.0, debugger_attached: Callable[[], bool] = is_debugger_attached) -> None:
        self.enabled = enabled
        self._poll_interval = poll_interval
        self._debugger_attached = debugger_attached

    async def handle(self, project_instance: ProjectPropertyView) -> None:
        if not self.enabled or not is_debug_requested(project_instance):
            return
        log.warning("Waiting for a debugger to attach to the Razor listener. Process id: %d", os.getpid())
        while not self._debugger_attached():
            await asyncio.sleep(self._poll_interval)
        log.info("Debugger attached")
