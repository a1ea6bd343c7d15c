"""Pydantic schemas for playlists and songs.

Foreign keys go out as camelCase (userId, playlistId) to keep the
wire format the API's clients already use.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ─── Songs ──────────────────────────────────────────────

class SongCreate(BaseModel):
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None


class SongRead(BaseModel):
    id: int
    title: Optional[str] = None
    album: Optional[str] = None
    artist: Optional[str] = None

    model_config = {"from_attributes": True}


class SongCreated(SongRead):
    playlist_id: int = Field(serialization_alias="playlistId")


# ─── Playlists ──────────────────────────────────────────

class PlaylistCreate(BaseModel):
    name: str = Field(..., min_length=1)


class PlaylistRead(BaseModel):
    id: int
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class PlaylistCreated(PlaylistRead):
    user_id: int = Field(serialization_alias="userId")


class PlaylistDetail(PlaylistRead):
    """Playlist with its songs."""
    songs: list[SongRead] = []
