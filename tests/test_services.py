"""Service layer tests against a mocked AsyncSession.

Learn: No database here — we capture the statements the services
build and check the owner filter is in every WHERE clause.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from playlist_api.db.models import Playlist, User
from playlist_api.services.playlist_service import PlaylistService
from playlist_api.services.user_service import EmailTaken, UserService


def _session(first=None, all_=(), rowcount=0):
    result = MagicMock()
    result.scalars.return_value.first.return_value = first
    result.scalars.return_value.all.return_value = list(all_)
    result.rowcount = rowcount

    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.get = AsyncMock(return_value=first)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


def _sql(call) -> str:
    stmt = call.args[0]
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


# ═══════════════════════════════════════════════════════════
# PlaylistService
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_for_user_filters_by_owner():
    session = _session(all_=[Playlist(id=1, name="a", user_id=5)])
    playlists = await PlaylistService(session).list_for_user(5)

    assert [p.id for p in playlists] == [1]
    assert "playlists.user_id = 5" in _sql(session.execute.call_args)


@pytest.mark.asyncio
async def test_get_for_user_filters_by_owner_and_id():
    session = _session()
    assert await PlaylistService(session).get_for_user(5, 9) is None

    sql = _sql(session.execute.call_args)
    assert "playlists.user_id = 5" in sql
    assert "playlists.id = 9" in sql


@pytest.mark.asyncio
async def test_delete_for_user_scopes_songs_and_playlist():
    session = _session(rowcount=1)
    deleted = await PlaylistService(session).delete_for_user(5, 9)

    assert deleted == 1
    songs_sql, playlist_sql = (_sql(c) for c in session.execute.call_args_list)
    assert songs_sql.startswith("DELETE FROM songs")
    assert "playlists.user_id = 5" in songs_sql
    assert playlist_sql.startswith("DELETE FROM playlists")
    assert "playlists.user_id = 5" in playlist_sql
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_add_song_to_unowned_playlist_writes_nothing():
    session = _session(first=None)
    song = await PlaylistService(session).add_song(5, 9, "t", "a", "b")

    assert song is None
    session.add.assert_not_called()
    session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_song_to_owned_playlist():
    session = _session(first=Playlist(id=9, name="p", user_id=5))
    song = await PlaylistService(session).add_song(5, 9, "t", "a", "b")

    assert song.playlist_id == 9
    assert song.title == "t"
    session.add.assert_called_once_with(song)
    session.commit.assert_awaited_once()


# ═══════════════════════════════════════════════════════════
# UserService
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_rejects_known_email():
    session = _session(first=User(id=1, email="a@example.com", password="h"))
    with pytest.raises(EmailTaken):
        await UserService(session).create("a@example.com", "hash")
    session.add.assert_not_called()


@pytest.mark.asyncio
async def test_create_maps_unique_violation_to_email_taken():
    session = _session(first=None)
    session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

    with pytest.raises(EmailTaken):
        await UserService(session).create("race@example.com", "hash")
    session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_stores_given_hash():
    session = _session(first=None)
    user = await UserService(session).create("b@example.com", "$2b$04$hash")

    assert user.email == "b@example.com"
    assert user.password == "$2b$04$hash"
    session.add.assert_called_once_with(user)
