"""Integration fixtures - real repositories on an in-memory SQLite database.

Every test gets a fresh database. Each call through ``run`` or ``in_uow``
opens its own session and unit of work, mirroring one request per operation.
"""

import pytest

from repertoire.domain.entities import Album, Artist, Playlist
from repertoire.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from repertoire.infrastructure.persistence.repositories.factories import (
    get_unit_of_work,
)
from tests.factories import make_artist


@pytest.fixture
async def engine():
    engine = create_db_engine("sqlite+aiosqlite:///:memory:")
    try:
        await init_db(engine)
    except Exception as e:
        pytest.fail(f"Database initialization failed: {e}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def run(session_factory):
    """Execute a use case in its own session."""

    async def _run(use_case, command):
        async with session_factory() as session:
            return await use_case.execute(command, get_unit_of_work(session))

    return _run


@pytest.fixture
def in_uow(session_factory):
    """Run work against real repositories inside one transaction."""

    async def _in_uow(work):
        async with session_factory() as session:
            return await get_unit_of_work(session).execute(work)

    return _in_uow


@pytest.fixture
async def artist(in_uow) -> Artist:
    artist = make_artist(["Ann", "Bob"])

    async def work(repos):
        return await repos.get_artist_repository().save_artist(artist)

    return await in_uow(work)


@pytest.fixture
async def album(in_uow, artist, user_id) -> Album:
    album = Album(user_id=user_id, title="Debut", artist_id=artist.id)

    async def work(repos):
        return await repos.get_album_repository().save_album(album)

    return await in_uow(work)


@pytest.fixture
async def playlist(in_uow, user_id) -> Playlist:
    playlist = Playlist(user_id=user_id, title="Friday gig")

    async def work(repos):
        return await repos.get_playlist_repository().save_playlist(playlist)

    return await in_uow(work)
