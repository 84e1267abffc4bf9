"""Repertoire: songs, albums, playlists and rehearsal tracking for musicians."""

__version__ = "0.1.0"
