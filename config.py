"""Global settings for the resource usage and deadlock analyzer."""

# (key, chart label) in enumeration order
DEFAULT_KIND_DEFINITIONS = (
    ("printers", "Printers"),
    ("faxes", "Faxes"),
    ("scanners", "Scanners"),
    ("tapeDrives", "Tape Drives"),
)

DEFAULT_CONSUMER_COUNT = 4
DEFAULT_CONSUMER_NAMES = ("Kashyap", "Mandeep", "Sharath", "AJ")

DEADLOCK_INFO = "Deadlock detected due to insufficient resources for the following requests:"
NO_DEADLOCK_INFO = "No deadlock detected. Resources are sufficient."
RECOVERY_SUGGESTION = (
    "Request from Employee {number} can be fulfilled. "
    "This will help in resolving the deadlock."
)
NO_RECOVERY_OPTIONS = "No recovery options available."

AVAILABLE_SERIES_LABEL = "Available Resources"
ON_HOLD_SERIES_LABEL = "On Hold Resources"
AVAILABLE_SERIES_COLOR = "rgba(75, 192, 192, 0.6)"
ON_HOLD_SERIES_COLOR = "rgba(255, 206, 86, 0.6)"
