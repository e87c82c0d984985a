# tests/test_diagnostics_annotations.py
"""Tests for collision-free failure annotations."""
from __future__ import annotations

import logging

from app.services.diagnostics import Failure, annotate, annotations_of
from app.services.diagnostics.annotations import MAX_KEY_SUFFIX


def test_repeated_key_gets_numbered_suffixes():
    exc = ValueError("bad")
    assert annotate(exc, "X", "first") == "X"
    assert annotate(exc, "X", "second") == "X-1"
    assert annotate(exc, "X", "third") == "X-2"
    assert exc.diagnostic_data == {"X": "first", "X-1": "second", "X-2": "third"}


def test_none_value_is_stored_as_null_literal():
    exc = OSError("io")
    annotate(exc, "User Name", None)
    assert annotations_of(exc)["User Name"] == "NULL"


def test_none_target_is_a_no_op():
    assert annotate(None, "k", "v") is None


def test_values_keep_their_type():
    failure = Failure(kind="ValueError")
    annotate(failure, "attempt", 3)
    assert failure.annotations == {"attempt": 3}


def test_plain_mapping_target():
    store = {"k": 1}
    assert annotate(store, "k", 2) == "k-1"
    assert list(store) == ["k", "k-1"]


def test_last_suffix_is_still_usable():
    store = {"X": 0, **{f"X-{i}": i for i in range(1, MAX_KEY_SUFFIX)}}
    assert annotate(store, "X", "late") == f"X-{MAX_KEY_SUFFIX}"


def test_exhausted_suffixes_drop_the_annotation(caplog):
    store = {"X": 0, **{f"X-{i}": i for i in range(1, MAX_KEY_SUFFIX + 1)}}
    before = dict(store)
    with caplog.at_level(logging.WARNING, logger="app.services.diagnostics.annotations"):
        assert annotate(store, "X", "late") is None
    assert store == before
    assert "dropped" in caplog.text


def test_unusable_target_never_raises(caplog):
    with caplog.at_level(logging.WARNING, logger="app.services.diagnostics.annotations"):
        assert annotate(object(), "k", "v") is None
    assert "could not be stored" in caplog.text


def test_annotations_of_creates_store_once():
    exc = RuntimeError("boom")
    store = annotations_of(exc)
    assert store == {}
    assert annotations_of(exc) is store


def test_snapshot_copies_annotations_from_exception():
    exc = KeyError("k")
    annotate(exc, "table", "users")
    failure = Failure.from_exception(exc)
    annotate(exc, "table", "orders")
    assert failure.annotations == {"table": "users"}
