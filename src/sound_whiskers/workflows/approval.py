"""
Approval of a generated preview into a saved playlist.

Approving creates the playlist, adds the preview's tracks that resolved to a
track URI, refreshes the caller's listing and finally resets the generation
workflow so the preview is discarded.
"""

import logging
from typing import Awaitable, Callable, Optional

from ..models import (
    AddTracksCommand,
    CreatePlaylistCommand,
    GenerationPreview,
    Playlist,
    TrackMetadata,
)
from ..notifications import NotificationSink, Severity
from .creation import CREATED_MESSAGE, CREATION_FAILED_MESSAGE

logger = logging.getLogger(__name__)

DEFAULT_PLAYLIST_NAME = "AI Generated Playlist"
ADDING_TRACKS_MESSAGE = "Adding tracks to playlist..."
ADD_TRACKS_FAILED_MESSAGE = "Could not add tracks to playlist."
NO_TRACKS_MESSAGE = (
    "Playlist created, but no tracks could be found on Spotify. Add tracks manually."
)
APPROVAL_PENDING_MESSAGE = "This playlist is already being saved"


def build_create_command(preview: GenerationPreview) -> CreatePlaylistCommand:
    """Derive the playlist name and description from a preview."""
    return CreatePlaylistCommand(
        name=preview.playlist_name or DEFAULT_PLAYLIST_NAME,
        description=preview.playlist_description or preview.summary or None,
    )


class ApprovalWorkflow:
    """Saves a reviewed preview as a playlist with its tracks.

    Args:
        create_playlist: Async operation persisting a CreatePlaylistCommand
        add_tracks: Async operation adding tracks to a playlist by id
        notifier: Notification sink
        refresh: Optional async callback refreshing the playlist listing
        on_reset: Optional callback run after a successful approval
    """

    def __init__(
        self,
        create_playlist: Callable[[CreatePlaylistCommand], Awaitable[Playlist]],
        add_tracks: Callable[[str, AddTracksCommand], Awaitable[object]],
        notifier: NotificationSink,
        refresh: Optional[Callable[[], Awaitable[None]]] = None,
        on_reset: Optional[Callable[[], None]] = None,
    ):
        self._create_playlist = create_playlist
        self._add_tracks = add_tracks
        self._notifier = notifier
        self._refresh = refresh
        self._on_reset = on_reset
        self._is_approving = False

    @property
    def is_approving(self) -> bool:
        return self._is_approving

    async def approve(self, preview: GenerationPreview) -> Optional[Playlist]:
        """Persist a preview.

        Returns:
            The created playlist, or None when creation failed
        """
        if self._is_approving:
            logger.warning("Ignoring approve() while an approval is pending")
            self._notifier.notify(Severity.WARNING, APPROVAL_PENDING_MESSAGE)
            return None

        self._is_approving = True
        try:
            command = build_create_command(preview)
            playlist = await self._create_playlist(command)
            self._notifier.notify(Severity.SUCCESS, CREATED_MESSAGE)

            tracks = [
                TrackMetadata.from_suggestion(item)
                for item in preview.items
                if item.track_uri
            ]
            if tracks:
                await self._add_preview_tracks(playlist, tracks)
            else:
                self._notifier.notify(Severity.WARNING, NO_TRACKS_MESSAGE)

            if preview.summary:
                self._notifier.notify(Severity.INFO, preview.summary)

            if self._refresh is not None:
                await self._refresh()
            if self._on_reset is not None:
                self._on_reset()

            return playlist
        except Exception as e:
            logger.warning(f"Playlist approval failed: {e}")
            self._notifier.notify(Severity.ERROR, str(e) or CREATION_FAILED_MESSAGE)
            return None
        finally:
            self._is_approving = False

    async def _add_preview_tracks(self, playlist: Playlist, tracks) -> None:
        self._notifier.notify(Severity.INFO, ADDING_TRACKS_MESSAGE)
        try:
            await self._add_tracks(
                playlist.id,
                AddTracksCommand(tracks=tracks, insert_after_position=0),
            )
            logger.info(f"Added {len(tracks)} tracks to playlist {playlist.id}")
        except Exception as e:
            logger.error(f"Failed to add tracks to playlist {playlist.id}: {e}")
            self._notifier.notify(Severity.ERROR, ADD_TRACKS_FAILED_MESSAGE)
