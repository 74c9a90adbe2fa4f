from .events import ActivityEntry, build_entry
from .logger import ActivityLogger

__all__ = ["ActivityEntry", "ActivityLogger", "build_entry"]
