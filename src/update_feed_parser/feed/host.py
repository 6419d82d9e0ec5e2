"""Host platform tag used to filter patch availability."""

import os
import platform
from typing import Optional


def detect_os_suffix(system: Optional[str] = None, os_name: Optional[str] = None) -> str:
    """Map a platform to one of ``win``, ``mac``, ``unix`` or ``unknown``.

    Args:
        system: Value of platform.system() (detected when omitted)
        os_name: Value of os.name (detected when omitted)
    """
    system = platform.system() if system is None else system
    os_name = os.name if os_name is None else os_name

    if system == "Windows":
        return "win"
    if system == "Darwin":
        return "mac"
    if os_name == "posix":
        return "unix"
    return "unknown"


# Resolved once per process
OS_SUFFIX = detect_os_suffix()
