"""Playlist and song API routes.

Learn: Every route receives the resolved User from get_current_user
and passes user.id to PlaylistService, which filters by owner. A
playlist owned by someone else looks exactly like a missing one.
"""

from fastapi import APIRouter, Depends

from playlist_api.auth.dependencies import get_current_user
from playlist_api.db.models import User
from playlist_api.dependencies import get_playlist_service
from playlist_api.errors import NotFound, PlaylistNotFound
from playlist_api.schemas.playlist import (
    PlaylistCreate,
    PlaylistCreated,
    PlaylistDetail,
    PlaylistRead,
    SongCreate,
    SongCreated,
)
from playlist_api.services.playlist_service import PlaylistService

router = APIRouter()


# ─── Playlists ──────────────────────────────────────────

@router.get("/playlists", response_model=list[PlaylistRead])
async def list_playlists(
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(get_playlist_service),
):
    return await svc.list_for_user(user.id)


@router.get("/playlists/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    playlist_id: int,
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(get_playlist_service),
):
    """A single playlist with its songs."""
    playlist = await svc.get_for_user(user.id, playlist_id, with_songs=True)
    if playlist is None:
        raise NotFound()
    return playlist


@router.post("/playlists", response_model=PlaylistCreated, status_code=201)
async def create_playlist(
    body: PlaylistCreate,
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(get_playlist_service),
):
    return await svc.create(user.id, body.name)


@router.delete("/playlists/{playlist_id}", response_model=int)
async def delete_playlist(
    playlist_id: int,
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(get_playlist_service),
):
    """Delete an owned playlist and its songs. Returns the number of rows removed."""
    deleted = await svc.delete_for_user(user.id, playlist_id)
    if deleted == 0:
        raise NotFound()
    return deleted


# ─── Songs ──────────────────────────────────────────────

@router.post(
    "/playlists/{playlist_id}/songs", response_model=SongCreated, status_code=201
)
async def add_song(
    playlist_id: int,
    body: SongCreate,
    user: User = Depends(get_current_user),
    svc: PlaylistService = Depends(get_playlist_service),
):
    song = await svc.add_song(
        user.id,
        playlist_id,
        title=body.title,
        artist=body.artist,
        album=body.album,
    )
    if song is None:
        raise PlaylistNotFound()
    return song
