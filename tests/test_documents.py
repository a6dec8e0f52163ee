"""Tests for decoding and projecting track records."""
import json
import pytest
from core.text_search.documents import (
    DecodeError,
    Document,
    decode_tracks,
    id_sort_key,
    project_tracks,
)
from tests.conftest import make_track


def test_from_record_reads_id_and_tags_only():
    record = make_track("t1", album="Rumours", artist="Fleetwood Mac", title="Dreams",
                        path="/music/dreams.flac", duration=257)
    assert Document.from_record(record) == Document("t1", "Rumours", "Fleetwood Mac", "Dreams")


def test_from_record_missing_tags_gives_empty_fields():
    assert Document.from_record({"id": 7}) == Document(7, "", "", "")


def test_from_record_converts_tag_values_to_text():
    document = Document.from_record({"id": 1, "tags": {"album": 1999, "artist": None}})
    assert document.album == "1999"
    assert document.artist == ""
    assert document.title == ""


@pytest.mark.parametrize("record", [
    "not a record",
    ["id", 1],
    {"tags": {"title": "No id"}},
    {"id": None},
    {"id": [1, 2]},
    {"id": 1, "tags": "Dreams"},
    {"id": True},
    {"id": False},
])
def test_from_record_rejects_malformed_records(record):
    with pytest.raises(DecodeError):
        Document.from_record(record)


def test_decode_tracks_accepts_structured_records(song_tracks):
    assert decode_tracks(song_tracks) == song_tracks


def test_decode_tracks_accepts_json_text_and_bytes(song_tracks):
    text = json.dumps(song_tracks)
    assert decode_tracks(text) == song_tracks
    assert decode_tracks(text.encode("utf-8")) == song_tracks


@pytest.mark.parametrize("payload", [None, "null"])
def test_decode_tracks_treats_null_as_empty(payload):
    assert decode_tracks(payload) == []


@pytest.mark.parametrize("payload", [
    "{not json",
    '{"id": 1}',
    '"just a string"',
    "42",
    b"\xff\xfe",
    42,
    {"id": 1},
])
def test_decode_tracks_rejects_bad_payloads(payload):
    with pytest.raises(DecodeError):
        decode_tracks(payload)


def test_project_tracks_keeps_first_record_per_id():
    documents = project_tracks([
        make_track(1, title="First"),
        make_track(2, title="Other"),
        make_track(1, title="Second"),
    ])
    assert [(d.id, d.title) for d in documents] == [(1, "First"), (2, "Other")]


def test_id_sort_key_orders_numbers_before_text():
    assert sorted(["b", 10, 2, "a", 2.5], key=id_sort_key) == [2, 2.5, 10, "a", "b"]
