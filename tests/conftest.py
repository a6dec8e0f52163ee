"""Shared fixtures for the track search tests."""
import pytest
from core.text_search.documents import project_tracks
from core.text_search.inverted_index import InvertedIndex


def make_track(track_id, album="", artist="", title="", **extra):
    record = {"id": track_id, "tags": {"album": album, "artist": artist, "title": title}}
    record.update(extra)
    return record


@pytest.fixture
def song_tracks():
    return [
        make_track(1, album="A", artist="X", title="Song One"),
        make_track(2, album="B", artist="Y", title="Song Two"),
    ]


@pytest.fixture
def catalog_tracks():
    return [
        make_track(1, album="Love Songs", artist="Various", title="Love Me Do"),
        make_track(2, album="Abbey Road", artist="The Beatles", title="Come Together"),
        make_track(3, album="Rumours", artist="Fleetwood Mac", title="Go Your Own Way"),
        make_track(4, album="Love", artist="The Cult", title="She Sells Sanctuary"),
        make_track(5, album="Café del Mar", artist="José González", title="Heartbeats"),
    ]


@pytest.fixture
def song_index(song_tracks):
    return InvertedIndex.build(project_tracks(song_tracks))


@pytest.fixture
def catalog_index(catalog_tracks):
    return InvertedIndex.build(project_tracks(catalog_tracks))


@pytest.fixture
def empty_index():
    return InvertedIndex.build([])
