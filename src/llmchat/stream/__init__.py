"""Stream driver module.

Hides how one completion request is opened, pulled and closed, and how
provider failures are turned into ``Failed`` events.
"""

from .driver import DebugCallback, StreamDriver, StreamHandle

__all__ = ["DebugCallback", "StreamDriver", "StreamHandle"]
