"""Playlist creation workflow."""

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from ..notifications import NotificationSink, Severity

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Playlist created successfully!"
CREATION_FAILED_MESSAGE = "Failed to create playlist"
CREATION_PENDING_MESSAGE = "A playlist is already being created"

CreateOperation = Callable[[Any], Union[Any, Awaitable[Any]]]


class CreationWorkflow:
    """Tracks one playlist persistence attempt at a time.

    The actual persistence is delegated to an injected operation, typically
    ``PlaylistApiClient.create_playlist``. Failures become error notifications
    and a None result; they are never raised to the caller.
    """

    def __init__(self, operation: CreateOperation, notifier: NotificationSink):
        self._operation = operation
        self._notifier = notifier
        self._is_creating = False

    @property
    def is_creating(self) -> bool:
        return self._is_creating

    async def create(self, command: Any) -> Optional[Any]:
        """Persist a playlist.

        Args:
            command: Creation payload passed through to the operation

        Returns:
            The created entity, or None on failure
        """
        if self._is_creating:
            logger.warning("Ignoring create() while a creation is pending")
            self._notifier.notify(Severity.WARNING, CREATION_PENDING_MESSAGE)
            return None

        self._is_creating = True
        try:
            result = self._operation(command)
            if inspect.isawaitable(result):
                result = await result

            self._notifier.notify(Severity.SUCCESS, CREATED_MESSAGE)
            return result
        except Exception as e:
            logger.warning(f"Playlist creation failed: {e}")
            self._notifier.notify(Severity.ERROR, str(e) or CREATION_FAILED_MESSAGE)
            return None
        finally:
            self._is_creating = False
