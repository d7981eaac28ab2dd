"""Playlist service client built on the remote action gateway.

Unlike the workflows, this client raises: any non-success gateway result is
turned into an ApiError carrying the server's message. The workflows catch
those and surface them as notifications.
"""

import logging
from typing import Any, Optional

from .exceptions import ApiError
from .gateway import (
    EntitlementDenied,
    GatewayResult,
    GenericFailure,
    QuotaExceeded,
    RemoteActionGateway,
    Success,
)
from .models import (
    AddTracksCommand,
    AddTracksResult,
    CreatePlaylistCommand,
    Playlist,
    PlaylistPage,
    UpdatePlaylistCommand,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT = "updated_at.desc"


def unwrap(result: GatewayResult, action: str) -> Any:
    """Return the body of a successful result or raise ApiError.

    Args:
        result: Gateway result
        action: Verb phrase used in the fallback message (e.g., "create playlist")

    Raises:
        ApiError: For every non-success result
    """
    if isinstance(result, Success):
        return result.data
    if isinstance(result, EntitlementDenied):
        raise ApiError(403, result.code, result.message or "This feature requires a PRO plan")
    if isinstance(result, QuotaExceeded):
        raise ApiError(429, "QUOTA_EXCEEDED", result.message or "Quota exceeded")
    if isinstance(result, GenericFailure):
        raise ApiError(
            result.status_code,
            result.code or "REQUEST_FAILED",
            result.message or f"Failed to {action}",
        )
    raise TypeError(f"Unexpected gateway result: {result!r}")


class PlaylistApiClient:
    """Async client for the playlist endpoints.

    Example:
        >>> async with RemoteActionGateway(config) as gateway:
        ...     client = PlaylistApiClient(gateway)
        ...     playlist = await client.create_playlist(CreatePlaylistCommand(name="Road trip"))
    """

    def __init__(self, gateway: RemoteActionGateway):
        self.gateway = gateway

    async def list_playlists(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort: str = DEFAULT_SORT,
        search: Optional[str] = None,
        is_deleted: bool = False,
    ) -> PlaylistPage:
        params = {
            "page": page,
            "pageSize": page_size,
            "sort": sort,
            "isDeleted": "true" if is_deleted else "false",
            "search": search or None,
        }
        result = await self.gateway.call("list_playlists", params=params)
        return PlaylistPage.from_dict(unwrap(result, "fetch playlists"))

    async def get_playlist(self, playlist_id: str) -> Playlist:
        result = await self.gateway.call(
            "get_playlist", path_params={"playlist_id": playlist_id}
        )
        return Playlist.from_dict(unwrap(result, "fetch playlist"))

    async def create_playlist(self, command: CreatePlaylistCommand) -> Playlist:
        result = await self.gateway.call("create_playlist", command.to_dict())
        playlist = Playlist.from_dict(unwrap(result, "create playlist"))
        logger.info(f"Created playlist {playlist.id} ({playlist.name})")
        return playlist

    async def update_playlist(self, playlist_id: str, command: UpdatePlaylistCommand) -> Playlist:
        result = await self.gateway.call(
            "update_playlist",
            command.to_dict(),
            path_params={"playlist_id": playlist_id},
        )
        return Playlist.from_dict(unwrap(result, "update playlist"))

    async def delete_playlist(self, playlist_id: str) -> None:
        result = await self.gateway.call(
            "delete_playlist", path_params={"playlist_id": playlist_id}
        )
        unwrap(result, "delete playlist")
        logger.info(f"Deleted playlist {playlist_id}")

    async def add_tracks(self, playlist_id: str, command: AddTracksCommand) -> AddTracksResult:
        result = await self.gateway.call(
            "add_tracks",
            command.to_dict(),
            path_params={"playlist_id": playlist_id},
        )
        return AddTracksResult.from_dict(unwrap(result, "add tracks") or {})
