"""Use cases for song arrangements, positioned within their song (0-based)."""

from uuid import UUID

from attrs import define

from repertoire.config import get_logger
from repertoire.domain.entities import SongArrangement
from repertoire.domain.ordering import (
    SONG_ARRANGEMENTS,
    append_position,
    move_within_collection,
    renumber_after_removal,
)
from repertoire.domain.repositories import RepositoryFactory, UnitOfWorkProtocol

from .common import require_ids, require_song

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class CreateSongArrangementCommand:
    song_id: UUID
    name: str


@define(slots=True)
class CreateSongArrangementUseCase:
    async def execute(
        self, command: CreateSongArrangementCommand, uow: UnitOfWorkProtocol
    ) -> SongArrangement:
        logger.info("Creating song arrangement", song_id=str(command.song_id))

        async def work(repos: RepositoryFactory) -> SongArrangement:
            song = await require_song(repos, command.song_id)
            arrangement = SongArrangement(
                song_id=song.id,
                name=command.name,
                order=append_position(song.arrangements, SONG_ARRANGEMENTS),
            )
            await repos.get_song_repository().save_song(
                song.with_arrangements([*song.arrangements, arrangement])
            )
            return arrangement

        return await uow.execute(work)


@define(frozen=True, slots=True)
class MoveSongArrangementCommand:
    song_id: UUID
    arrangement_id: UUID
    over_arrangement_id: UUID


@define(slots=True)
class MoveSongArrangementUseCase:
    async def execute(
        self, command: MoveSongArrangementCommand, uow: UnitOfWorkProtocol
    ) -> list[SongArrangement]:
        async def work(repos: RepositoryFactory) -> list[SongArrangement]:
            song = await require_song(repos, command.song_id)
            require_ids(
                {a.id for a in song.arrangements},
                [command.arrangement_id, command.over_arrangement_id],
                "Song arrangement",
            )
            arrangements = move_within_collection(
                song.arrangements,
                command.arrangement_id,
                command.over_arrangement_id,
                SONG_ARRANGEMENTS,
            )
            await repos.get_song_repository().save_song(
                song.with_arrangements(arrangements)
            )
            return arrangements

        return await uow.execute(work)


@define(frozen=True, slots=True)
class DeleteSongArrangementCommand:
    song_id: UUID
    arrangement_id: UUID


@define(slots=True)
class DeleteSongArrangementUseCase:
    async def execute(
        self, command: DeleteSongArrangementCommand, uow: UnitOfWorkProtocol
    ) -> None:
        async def work(repos: RepositoryFactory) -> None:
            song = await require_song(repos, command.song_id)
            require_ids(
                {a.id for a in song.arrangements},
                [command.arrangement_id],
                "Song arrangement",
            )
            arrangements = renumber_after_removal(
                song.arrangements, [command.arrangement_id], SONG_ARRANGEMENTS
            )
            await repos.get_song_repository().save_song(
                song.with_arrangements(arrangements)
            )

        await uow.execute(work)
