from __future__ import annotations

from src.timekeeper.timekeeper.sync.document_store import InMemoryDocumentStore


def test_subscribe_delivers_current_then_changes():
    store = InMemoryDocumentStore({"master": {"employees": []}})
    seen = []

    unsubscribe = store.subscribe("master", seen.append)
    store.write("master", {"employees": [{"name": "A"}]})
    unsubscribe()
    store.write("master", {"employees": []})

    assert seen == [{"employees": []}, {"employees": [{"name": "A"}]}]


def test_absent_document_is_none():
    store = InMemoryDocumentStore()
    seen = []

    store.subscribe("other", seen.append)

    assert seen == [None]
    assert store.read("other") is None


def test_reads_are_copies():
    store = InMemoryDocumentStore()
    doc = {"employees": [{"name": "A"}]}
    store.write("master", doc)

    doc["employees"].append({"name": "B"})
    store.read("master")["employees"].clear()

    assert store.read("master") == {"employees": [{"name": "A"}]}
