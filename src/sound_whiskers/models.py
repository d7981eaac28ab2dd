"""
Data models for the Sound Whiskers client.

Entities:
    - GenerationStatus: Lifecycle of an AI generation workflow
    - SuggestedTrack / GenerationPreview: Unsaved result of an AI generation
    - GenerationState: Status and preview, replaced as one value
    - CreatePlaylistCommand / UpdatePlaylistCommand: Playlist write payloads
    - GeneratePlaylistCommand: AI prompt payload
    - TrackMetadata / AddTracksCommand / AddTracksResult: Track insertion
    - Playlist / PlaylistPage: Persisted playlists returned by the service
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ValidationError


PLAYLIST_NAME_MAX_LENGTH = 100
PLAYLIST_DESCRIPTION_MAX_LENGTH = 500
PROMPT_MIN_LENGTH = 10
PROMPT_MAX_LENGTH = 500
RECOMMENDED_MIN_TRACKS = 12


# ============================================================================
# Enumerations
# ============================================================================


class GenerationStatus(Enum):
    """Status of an AI playlist generation workflow."""
    IDLE = "idle"
    GENERATING = "generating"
    PREVIEW = "preview"


# ============================================================================
# AI Generation
# ============================================================================


@dataclass(frozen=True)
class SuggestedTrack:
    """Single track suggested by AI generation."""
    artist: str
    title: str
    album: str
    track_uri: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SuggestedTrack":
        return cls(
            artist=data.get("artist", ""),
            title=data.get("title", ""),
            album=data.get("album", ""),
            track_uri=data.get("trackUri") or "",
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "trackUri": self.track_uri,
            "artist": self.artist,
            "title": self.title,
            "album": self.album,
        }


@dataclass(frozen=True)
class GenerationPreview:
    """Unsaved, reviewable result of an AI generation call.

    Attributes:
        count: Number of generated tracks
        warning_under_min_count: True when fewer than the recommended
            number of tracks could be generated
        session_id: AI session identifier assigned by the service
        playlist_name: Suggested playlist name
        playlist_description: Suggested playlist description
        summary: Short curator summary of the selection
        items: Suggested tracks in playlist order
    """
    count: int
    warning_under_min_count: bool = False
    session_id: Optional[str] = None
    playlist_name: Optional[str] = None
    playlist_description: Optional[str] = None
    summary: Optional[str] = None
    items: Tuple[SuggestedTrack, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationPreview":
        """Build a preview from the generation endpoint's JSON body.

        Raises:
            ValueError: If the body is not an object or has no usable count
        """
        if not isinstance(data, dict):
            raise ValueError("Generation response is not a JSON object")

        items = tuple(
            SuggestedTrack.from_dict(item)
            for item in data.get("items") or []
            if isinstance(item, dict)
        )
        count = data.get("count", len(items))
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"Invalid track count in generation response: {count!r}")

        return cls(
            count=count,
            warning_under_min_count=bool(data.get("warningUnderMinCount", False)),
            session_id=data.get("sessionId"),
            playlist_name=data.get("playlistName"),
            playlist_description=data.get("playlistDescription"),
            summary=data.get("summary"),
            items=items,
        )


@dataclass(frozen=True)
class GenerationState:
    """Status and preview of a generation workflow, replaced as one value."""
    status: GenerationStatus = GenerationStatus.IDLE
    preview: Optional[GenerationPreview] = None

    def __post_init__(self):
        if self.status is GenerationStatus.PREVIEW and self.preview is None:
            raise ValueError("Preview status requires a stored preview")


# ============================================================================
# Commands
# ============================================================================


def _validate_name(name: Optional[str]) -> List[str]:
    errors = []
    if name is None or not name.strip():
        errors.append("Playlist name is required")
    elif len(name) > PLAYLIST_NAME_MAX_LENGTH:
        errors.append("Name too long")
    return errors


def _validate_description(description: Optional[str]) -> List[str]:
    if description is not None and len(description) > PLAYLIST_DESCRIPTION_MAX_LENGTH:
        return ["Description too long"]
    return []


@dataclass
class CreatePlaylistCommand:
    """Payload for creating a playlist."""
    name: str
    description: Optional[str] = None

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def validate(self) -> List[str]:
        """Validate playlist fields.

        Returns:
            List of validation error messages (empty if valid)
        """
        return _validate_name(self.name) + _validate_description(self.description)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}


@dataclass
class UpdatePlaylistCommand:
    """Partial update of a playlist. Fields left as None are not sent."""
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def validate(self) -> List[str]:
        errors = []
        if self.name is not None:
            errors.extend(_validate_name(self.name))
        errors.extend(_validate_description(self.description))
        return errors

    def to_dict(self) -> Dict[str, Any]:
        body = {}
        if self.name is not None:
            body["name"] = self.name
        if self.description is not None:
            body["description"] = self.description
        return body


@dataclass
class GeneratePlaylistCommand:
    """Free-text prompt for AI playlist generation."""
    prompt: str

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def validate(self) -> List[str]:
        errors = []
        length = len(self.prompt.strip()) if self.prompt else 0
        if length < PROMPT_MIN_LENGTH:
            errors.append(
                "Please provide a more detailed description "
                f"(at least {PROMPT_MIN_LENGTH} characters)"
            )
        elif len(self.prompt) > PROMPT_MAX_LENGTH:
            errors.append(f"Prompt is too long (max {PROMPT_MAX_LENGTH} characters)")
        return errors


@dataclass(frozen=True)
class TrackMetadata:
    """Track data sent when adding tracks to a playlist."""
    track_uri: str
    artist: str
    title: str
    album: str

    @classmethod
    def from_suggestion(cls, track: SuggestedTrack) -> "TrackMetadata":
        return cls(
            track_uri=track.track_uri,
            artist=track.artist,
            title=track.title,
            album=track.album,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "trackUri": self.track_uri,
            "artist": self.artist,
            "title": self.title,
            "album": self.album,
        }


@dataclass
class AddTracksCommand:
    """Tracks to insert into a playlist after a given position."""
    tracks: List[TrackMetadata] = field(default_factory=list)
    insert_after_position: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"tracks": [track.to_dict() for track in self.tracks]}
        if self.insert_after_position is not None:
            body["insertAfterPosition"] = self.insert_after_position
        return body


# ============================================================================
# Service responses
# ============================================================================


@dataclass
class Playlist:
    """Playlist persisted by the service."""
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    track_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Playlist":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            track_count=data.get("trackCount"),
        )


@dataclass
class PlaylistPage:
    """One page of the playlist listing."""
    items: List[Playlist]
    page: int
    page_size: int
    total: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaylistPage":
        items = [Playlist.from_dict(item) for item in data.get("items", [])]
        return cls(
            items=items,
            page=data.get("page", 1),
            page_size=data.get("pageSize", len(items)),
            total=data.get("total", len(items)),
        )


@dataclass
class AddTracksResult:
    """Outcome of adding tracks to a playlist."""
    added: int
    positions: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddTracksResult":
        return cls(added=data.get("added", 0), positions=list(data.get("positions", [])))
