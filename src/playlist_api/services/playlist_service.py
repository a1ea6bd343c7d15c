"""Playlist service — ownership-scoped playlist and song storage.

Learn: Every method takes the owner's user_id and puts it in the WHERE
clause. There is no way to read or change a playlist without naming
its owner, so a route cannot accidentally leak another user's data.
Songs are only reachable through a playlist lookup that already
filtered by owner.
"""

from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from playlist_api.db.models import Playlist, Song

logger = structlog.get_logger()


class PlaylistService:
    """Business logic for playlists and their songs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Playlists ──────────────────────────────────────

    async def list_for_user(self, user_id: int) -> list[Playlist]:
        result = await self.db.execute(
            select(Playlist).where(Playlist.user_id == user_id).order_by(Playlist.id)
        )
        return list(result.scalars().all())

    async def get_for_user(
        self, user_id: int, playlist_id: int, with_songs: bool = False
    ) -> Optional[Playlist]:
        q = select(Playlist).where(
            Playlist.user_id == user_id, Playlist.id == playlist_id
        )
        if with_songs:
            q = q.options(selectinload(Playlist.songs))
        result = await self.db.execute(q)
        return result.scalars().first()

    async def create(self, user_id: int, name: Optional[str]) -> Playlist:
        playlist = Playlist(name=name, user_id=user_id)
        self.db.add(playlist)
        await self.db.commit()
        await self.db.refresh(playlist)
        logger.info("playlists.created", playlist_id=playlist.id)
        return playlist

    async def delete_for_user(self, user_id: int, playlist_id: int) -> int:
        """Delete an owned playlist (and its songs). Returns rows deleted."""
        # Bulk delete skips ORM cascades, so remove the songs explicitly.
        owned = select(Playlist.id).where(
            Playlist.user_id == user_id, Playlist.id == playlist_id
        )
        await self.db.execute(
            delete(Song)
            .where(Song.playlist_id.in_(owned))
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(Playlist)
            .where(Playlist.user_id == user_id, Playlist.id == playlist_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        if result.rowcount:
            logger.info("playlists.deleted", playlist_id=playlist_id)
        return result.rowcount

    # ─── Songs ──────────────────────────────────────────

    async def add_song(
        self,
        user_id: int,
        playlist_id: int,
        title: Optional[str],
        artist: Optional[str],
        album: Optional[str],
    ) -> Optional[Song]:
        """Append a song to an owned playlist. None if the playlist isn't theirs."""
        playlist = await self.get_for_user(user_id, playlist_id)
        if playlist is None:
            return None

        song = Song(title=title, artist=artist, album=album, playlist_id=playlist.id)
        self.db.add(song)
        await self.db.commit()
        await self.db.refresh(song)
        logger.info("playlists.song_added", playlist_id=playlist.id, song_id=song.id)
        return song
