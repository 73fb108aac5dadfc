"""podinspect: resolve, verify and report on CocoaPods projects."""

from podinspect.exceptions import InspectError, OutOfSyncError
from podinspect.inspector import PLUGIN_NAME, inspect, inspect_sync, plugin_name
from podinspect.models import InspectionResult, InspectOptions

__all__ = [
    "PLUGIN_NAME",
    "InspectError",
    "InspectOptions",
    "InspectionResult",
    "OutOfSyncError",
    "inspect",
    "inspect_sync",
    "plugin_name",
]
