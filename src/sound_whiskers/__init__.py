"""Sound Whiskers client

Asynchronous client for the Sound Whiskers playlist service: AI playlist
generation with preview and approval, playlist creation, and the remote
action gateway those workflows share.
"""

__version__ = "1.0.0"

from .client import PlaylistApiClient
from .config import SoundWhiskersConfig
from .exceptions import ApiError, SoundWhiskersError, ValidationError
from .gateway import (
    EntitlementDenied,
    GenericFailure,
    QuotaExceeded,
    RemoteActionGateway,
    Success,
)
from .models import GenerationPreview, GenerationStatus
from .notifications import (
    LoggingNotificationSink,
    NotificationSink,
    RecordingNotificationSink,
    Severity,
)
from .workflows import ApprovalWorkflow, CreationWorkflow, GenerationWorkflow

__all__ = [
    "ApiError",
    "ApprovalWorkflow",
    "CreationWorkflow",
    "EntitlementDenied",
    "GenerationPreview",
    "GenerationStatus",
    "GenerationWorkflow",
    "GenericFailure",
    "LoggingNotificationSink",
    "NotificationSink",
    "PlaylistApiClient",
    "QuotaExceeded",
    "RecordingNotificationSink",
    "RemoteActionGateway",
    "Severity",
    "SoundWhiskersConfig",
    "SoundWhiskersError",
    "Success",
    "ValidationError",
]
