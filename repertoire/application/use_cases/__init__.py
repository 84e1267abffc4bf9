"""Application use cases - orchestrate business operations."""

from .albums import (
    AddSongsToAlbumCommand,
    AddSongsToAlbumUseCase,
    MoveSongFromAlbumCommand,
    MoveSongFromAlbumUseCase,
    RemoveSongsFromAlbumCommand,
    RemoveSongsFromAlbumUseCase,
)
from .artists import (
    CreateBandMemberCommand,
    CreateBandMemberUseCase,
    DeleteBandMemberCommand,
    DeleteBandMemberUseCase,
    MoveBandMemberCommand,
    MoveBandMemberUseCase,
)
from .playlists import (
    AddAlbumsToPlaylistCommand,
    AddAlbumsToPlaylistUseCase,
    AddArtistsToPlaylistCommand,
    AddArtistsToPlaylistUseCase,
    AddSongsToPlaylistCommand,
    AddSongsToPlaylistUseCase,
    MoveSongFromPlaylistCommand,
    MoveSongFromPlaylistUseCase,
    RemoveSongsFromPlaylistCommand,
    RemoveSongsFromPlaylistUseCase,
    ShufflePlaylistSongsCommand,
    ShufflePlaylistSongsUseCase,
)
from .rehearsals import (
    AddPartialSongRehearsalCommand,
    AddPartialSongRehearsalUseCase,
    AddPerfectRehearsalsToAlbumsCommand,
    AddPerfectRehearsalsToAlbumsUseCase,
    AddPerfectRehearsalsToArtistsCommand,
    AddPerfectRehearsalsToArtistsUseCase,
    AddPerfectRehearsalsToPlaylistsCommand,
    AddPerfectRehearsalsToPlaylistsUseCase,
    AddPerfectSongRehearsalCommand,
    AddPerfectSongRehearsalUseCase,
    AddPerfectSongRehearsalsCommand,
    AddPerfectSongRehearsalsUseCase,
)
from .song_arrangements import (
    CreateSongArrangementCommand,
    CreateSongArrangementUseCase,
    DeleteSongArrangementCommand,
    DeleteSongArrangementUseCase,
    MoveSongArrangementCommand,
    MoveSongArrangementUseCase,
)
from .song_sections import (
    BulkDeleteSongSectionsCommand,
    BulkDeleteSongSectionsUseCase,
    BulkRehearsalsSongSectionsCommand,
    BulkRehearsalsSongSectionsUseCase,
    CreateSongSectionCommand,
    CreateSongSectionUseCase,
    DeleteSongSectionCommand,
    DeleteSongSectionUseCase,
    MoveSongSectionCommand,
    MoveSongSectionUseCase,
    SectionOccurrences,
    SectionRehearsals,
    UpdateSongSectionCommand,
    UpdateSongSectionsOccurrencesCommand,
    UpdateSongSectionsOccurrencesUseCase,
    UpdateSongSectionsPartialOccurrencesCommand,
    UpdateSongSectionsPartialOccurrencesUseCase,
    UpdateSongSectionUseCase,
)
from .songs import (
    BulkDeleteSongsCommand,
    BulkDeleteSongsUseCase,
    CreateSongCommand,
    CreateSongUseCase,
    SectionDraft,
    UpdateSongCommand,
    UpdateSongUseCase,
)
from .user_data import (
    CreateReferenceItemCommand,
    CreateReferenceItemUseCase,
    DeleteReferenceItemCommand,
    DeleteReferenceItemUseCase,
    MoveReferenceItemCommand,
    MoveReferenceItemUseCase,
)

__all__ = [
    # Albums
    "AddSongsToAlbumCommand",
    "AddSongsToAlbumUseCase",
    "MoveSongFromAlbumCommand",
    "MoveSongFromAlbumUseCase",
    "RemoveSongsFromAlbumCommand",
    "RemoveSongsFromAlbumUseCase",
    # Artists
    "CreateBandMemberCommand",
    "CreateBandMemberUseCase",
    "DeleteBandMemberCommand",
    "DeleteBandMemberUseCase",
    "MoveBandMemberCommand",
    "MoveBandMemberUseCase",
    # Playlists
    "AddAlbumsToPlaylistCommand",
    "AddAlbumsToPlaylistUseCase",
    "AddArtistsToPlaylistCommand",
    "AddArtistsToPlaylistUseCase",
    "AddSongsToPlaylistCommand",
    "AddSongsToPlaylistUseCase",
    "MoveSongFromPlaylistCommand",
    "MoveSongFromPlaylistUseCase",
    "RemoveSongsFromPlaylistCommand",
    "RemoveSongsFromPlaylistUseCase",
    "ShufflePlaylistSongsCommand",
    "ShufflePlaylistSongsUseCase",
    # Rehearsals
    "AddPartialSongRehearsalCommand",
    "AddPartialSongRehearsalUseCase",
    "AddPerfectRehearsalsToAlbumsCommand",
    "AddPerfectRehearsalsToAlbumsUseCase",
    "AddPerfectRehearsalsToArtistsCommand",
    "AddPerfectRehearsalsToArtistsUseCase",
    "AddPerfectRehearsalsToPlaylistsCommand",
    "AddPerfectRehearsalsToPlaylistsUseCase",
    "AddPerfectSongRehearsalCommand",
    "AddPerfectSongRehearsalUseCase",
    "AddPerfectSongRehearsalsCommand",
    "AddPerfectSongRehearsalsUseCase",
    # Song arrangements
    "CreateSongArrangementCommand",
    "CreateSongArrangementUseCase",
    "DeleteSongArrangementCommand",
    "DeleteSongArrangementUseCase",
    "MoveSongArrangementCommand",
    "MoveSongArrangementUseCase",
    # Song sections
    "BulkDeleteSongSectionsCommand",
    "BulkDeleteSongSectionsUseCase",
    "BulkRehearsalsSongSectionsCommand",
    "BulkRehearsalsSongSectionsUseCase",
    "CreateSongSectionCommand",
    "CreateSongSectionUseCase",
    "DeleteSongSectionCommand",
    "DeleteSongSectionUseCase",
    "MoveSongSectionCommand",
    "MoveSongSectionUseCase",
    "SectionOccurrences",
    "SectionRehearsals",
    "UpdateSongSectionCommand",
    "UpdateSongSectionsOccurrencesCommand",
    "UpdateSongSectionsOccurrencesUseCase",
    "UpdateSongSectionsPartialOccurrencesCommand",
    "UpdateSongSectionsPartialOccurrencesUseCase",
    "UpdateSongSectionUseCase",
    # Songs
    "BulkDeleteSongsCommand",
    "BulkDeleteSongsUseCase",
    "CreateSongCommand",
    "CreateSongUseCase",
    "SectionDraft",
    "UpdateSongCommand",
    "UpdateSongUseCase",
    # User reference lists
    "CreateReferenceItemCommand",
    "CreateReferenceItemUseCase",
    "DeleteReferenceItemCommand",
    "DeleteReferenceItemUseCase",
    "MoveReferenceItemCommand",
    "MoveReferenceItemUseCase",
]
