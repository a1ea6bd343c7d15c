"""Test fixtures — an app built from explicit test settings, no database.

Learn: Testing pattern for FastAPI + service layer:

1. Settings are constructed directly (no env vars), with a cheap bcrypt
   cost factor so hashing doesn't dominate test time.
2. get_user_service / get_playlist_service are overridden with in-memory
   fakes that keep the same method contracts as the SQLAlchemy services,
   including owner filtering.
3. The real PasswordHasher, TokenService and Identity Resolver run
   untouched, so auth tests exercise the actual pipeline.
"""

import itertools
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from playlist_api.config import Settings
from playlist_api.db.models import Playlist, Song, User
from playlist_api.dependencies import get_playlist_service, get_user_service
from playlist_api.main import create_app
from playlist_api.services.user_service import EmailTaken

TEST_SECRET = "test-jwt-secret-0123456789abcdef0123456789"


# ═══════════════════════════════════════════════════════════
# In-memory services
# ═══════════════════════════════════════════════════════════


class MemoryStore:
    """Rows shared by the fake services for one test."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.playlists: dict[int, Playlist] = {}
        self._ids = {
            "users": itertools.count(1),
            "playlists": itertools.count(1),
            "songs": itertools.count(1),
        }

    def next_id(self, table: str) -> int:
        return next(self._ids[table])


class FakeUserService:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.store.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self.store.users.values():
            if user.email == email:
                return user
        return None

    async def create(self, email: str, password_hash: str) -> User:
        if await self.get_by_email(email) is not None:
            raise EmailTaken(email)
        user = User(id=self.store.next_id("users"), email=email, password=password_hash)
        self.store.users[user.id] = user
        return user


class FakePlaylistService:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_for_user(self, user_id: int) -> list[Playlist]:
        return [p for p in self.store.playlists.values() if p.user_id == user_id]

    async def get_for_user(
        self, user_id: int, playlist_id: int, with_songs: bool = False
    ) -> Optional[Playlist]:
        playlist = self.store.playlists.get(playlist_id)
        if playlist is None or playlist.user_id != user_id:
            return None
        return playlist

    async def create(self, user_id: int, name: Optional[str]) -> Playlist:
        playlist = Playlist(id=self.store.next_id("playlists"), name=name, user_id=user_id)
        self.store.playlists[playlist.id] = playlist
        return playlist

    async def delete_for_user(self, user_id: int, playlist_id: int) -> int:
        if await self.get_for_user(user_id, playlist_id) is None:
            return 0
        del self.store.playlists[playlist_id]
        return 1

    async def add_song(self, user_id, playlist_id, title, artist, album) -> Optional[Song]:
        playlist = await self.get_for_user(user_id, playlist_id)
        if playlist is None:
            return None
        song = Song(
            id=self.store.next_id("songs"),
            title=title,
            artist=artist,
            album=album,
            playlist_id=playlist.id,
        )
        playlist.songs.append(song)
        return song


# ═══════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        db_pass="test-db-pass",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        create_tables=False,
    )


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def app(settings, store):
    app = create_app(settings)
    app.dependency_overrides[get_user_service] = lambda: FakeUserService(store)
    app.dependency_overrides[get_playlist_service] = lambda: FakePlaylistService(store)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def token_service(app):
    return app.state.token_service


@pytest.fixture()
def login(client):
    """Register an account, log in, and return its Authorization headers."""

    async def _login(email: str, password: str = "password_123") -> dict:
        r = await client.post(
            "/users",
            json={
                "email": email,
                "password": password,
                "password_confirmation": password,
            },
        )
        assert r.status_code == 201
        r = await client.post("/tokens", json={"email": email, "password": password})
        assert r.status_code == 200
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _login
