"""Tests for duplicate-aware bulk insertion into playlists."""

from uuid import uuid4

import pytest

from repertoire.domain.duplicates import append_to_playlist, partition_and_filter
from repertoire.domain.exceptions import BadRequestError
from tests.factories import make_playlist, make_song


@pytest.fixture
def songs():
    """Five songs s0..s4; s1..s3 belong to album A, s4 to album B."""
    album_a, album_b = uuid4(), uuid4()
    return [
        make_song(title="s0"),
        make_song(title="s1", album_id=album_a),
        make_song(title="s2", album_id=album_a),
        make_song(title="s3", album_id=album_a),
        make_song(title="s4", album_id=album_b),
    ]


class TestPartitionAndFilter:
    def test_no_duplicates_adds_everything_in_order(self, songs):
        resolution = partition_and_filter(songs, existing_song_ids=[])

        assert resolution.success is True
        assert resolution.duplicate_song_ids == []
        assert resolution.duplicate_group_ids == []
        assert resolution.added_song_ids == [s.id for s in songs]

    @pytest.mark.parametrize("force_add", [True, False])
    def test_force_without_duplicates_is_bad_request(self, songs, force_add):
        with pytest.raises(BadRequestError, match="no duplicates"):
            partition_and_filter(songs, [uuid4()], force_add=force_add)

    def test_unresolved_duplicates_add_nothing(self, songs):
        """Test duplicates are reported and nothing is added until decided."""
        resolution = partition_and_filter(songs, [songs[2].id])

        assert resolution.success is False
        assert resolution.duplicate_song_ids == [songs[2].id]
        assert resolution.added_song_ids == []

    def test_force_true_adds_duplicates_again(self, songs):
        resolution = partition_and_filter(songs, [songs[2].id], force_add=True)

        assert resolution.success is True
        assert resolution.added_song_ids == [s.id for s in songs]
        assert resolution.duplicate_song_ids == [songs[2].id]

    def test_force_false_skips_duplicates_and_reports_full_groups(self, songs):
        """Test existing {s2, s4}: album A is partly new, album B fully duplicate."""
        s1, s2, s3, s4 = songs[1:]
        candidates = [s1, s2, s3, s4]

        resolution = partition_and_filter(
            candidates,
            [s2.id, s4.id],
            force_add=False,
            group_key=lambda song: song.album_id,
        )

        assert resolution.success is True
        assert resolution.added_song_ids == [s1.id, s3.id]
        assert resolution.duplicate_song_ids == [s2.id, s4.id]
        assert resolution.duplicate_group_ids == [s4.album_id]

    def test_repeated_candidates_reported_once(self, songs):
        song = songs[0]

        resolution = partition_and_filter([song, song], [song.id])

        assert resolution.duplicate_song_ids == [song.id]


class TestAppendToPlaylist:
    def test_appends_with_consecutive_track_numbers(self):
        playlist = make_playlist([uuid4(), uuid4()])
        new_ids = [uuid4(), uuid4(), uuid4()]

        updated = append_to_playlist(playlist, new_ids)

        assert [ps.song_track_no for ps in updated.songs] == [1, 2, 3, 4, 5]
        assert [ps.song_id for ps in updated.songs[2:]] == new_ids
        assert all(ps.playlist_id == playlist.id for ps in updated.songs)
        assert len(playlist.songs) == 2  # Original unchanged

    def test_same_song_may_appear_twice(self):
        song_id = uuid4()
        playlist = make_playlist([song_id])

        updated = append_to_playlist(playlist, [song_id])

        assert [ps.song_id for ps in updated.songs] == [song_id, song_id]
        assert updated.songs[0].id != updated.songs[1].id
