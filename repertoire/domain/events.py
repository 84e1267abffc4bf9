"""Topics published after song mutations."""

from enum import StrEnum


class Topic(StrEnum):
    SONG_CREATED = "song_created"
    SONGS_UPDATED = "songs_updated"
    SONGS_DELETED = "songs_deleted"
