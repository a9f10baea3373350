from __future__ import annotations

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, ExecutionTimeout

from models.subject import Subject, SubjectStore, parse_subject_id, validate_subject_name
from utils.errors import InvalidInput, NotFound, StorageFailure, Unavailable

from fakes import FailingCollection


def test_parse_subject_id_accepts_hex_string():
    oid = ObjectId()
    assert parse_subject_id(str(oid)) == oid


@pytest.mark.parametrize("raw", ["", "123", "not-an-object-id", "z" * 24, None, 42])
def test_parse_subject_id_rejects_malformed(raw):
    with pytest.raises(InvalidInput):
        parse_subject_id(raw)


@pytest.mark.parametrize("name", [None, "", 5, ["Math"]])
def test_validate_subject_name_rejects_missing_or_empty(name):
    with pytest.raises(InvalidInput):
        validate_subject_name(name)


@pytest.mark.parametrize("name", ["  Physics ", "   ", "Math 101"])
def test_names_are_stored_exactly_as_given(store, name):
    created = store.create_subject(name)

    assert created.name == name
    assert [s.name for s in store.list_subjects()] == [name]


def test_subject_json_uses_string_id():
    oid = ObjectId()
    subject = Subject.from_document({"_id": oid, "name": "Math", "attended": 2, "absent": 1})
    assert subject.to_json() == {"id": str(oid), "name": "Math", "attended": 2, "absent": 1}


def test_create_builds_record_from_inserted_fields(store, collection):
    subject = store.create_subject("Math")

    assert isinstance(subject.id, ObjectId)
    assert (subject.name, subject.attended, subject.absent) == ("Math", 0, 0)
    assert collection.calls[-1] == ("insert_one", {"name": "Math", "attended": 0, "absent": 0})


def test_create_with_invalid_name_writes_nothing(store, collection):
    with pytest.raises(InvalidInput):
        store.create_subject("")
    assert collection.count() == 0


def test_list_is_in_creation_order(store):
    names = ["Math", "Physics", "Chemistry"]
    for name in names:
        store.create_subject(name)

    assert [s.name for s in store.list_subjects()] == names


def test_mark_present_uses_atomic_increment(store, collection):
    subject = store.create_subject("Math")

    store.mark_present(str(subject.id))

    assert collection.calls[-1] == ("update_one", {"_id": subject.id}, {"$inc": {"attended": 1}})
    doc = collection.find_one({"_id": subject.id})
    assert (doc["attended"], doc["absent"]) == (1, 0)


def test_mark_absent_only_touches_absent(store, collection):
    subject = store.create_subject("Math")

    store.mark_absent(str(subject.id))
    store.mark_absent(str(subject.id))

    doc = collection.find_one({"_id": subject.id})
    assert (doc["attended"], doc["absent"]) == (0, 2)


def test_increment_rejects_unknown_field(store):
    subject = store.create_subject("Math")
    with pytest.raises(ValueError):
        store.increment(str(subject.id), "name")


@pytest.mark.parametrize("operation", ["mark_present", "mark_absent", "delete_subject"])
def test_missing_subject_raises_not_found(store, collection, operation):
    store.create_subject("Math")
    before = store.list_subjects()

    with pytest.raises(NotFound):
        getattr(store, operation)(str(ObjectId()))

    assert [s.to_json() for s in store.list_subjects()] == [s.to_json() for s in before]


def test_delete_is_final(store):
    subject = store.create_subject("Math")
    store.delete_subject(str(subject.id))

    assert store.list_subjects() == []
    with pytest.raises(NotFound):
        store.mark_present(str(subject.id))
    with pytest.raises(NotFound):
        store.delete_subject(str(subject.id))


def test_detached_store_is_unavailable():
    store = SubjectStore()
    assert not store.ready
    with pytest.raises(Unavailable):
        store.list_subjects()
    with pytest.raises(Unavailable):
        store.mark_present(str(ObjectId()))


def test_attach_makes_store_ready(collection):
    store = SubjectStore()
    store.attach(collection)
    assert store.ready
    assert store.list_subjects() == []


@pytest.mark.parametrize("error", [AutoReconnect("connection reset"), ExecutionTimeout("operation exceeded time limit")])
def test_driver_errors_become_storage_failures(error):
    store = SubjectStore(FailingCollection(error), timeout=1.0)

    with pytest.raises(StorageFailure) as excinfo:
        store.list_subjects()
    assert excinfo.value.message == "Error fetching subjects"
    assert excinfo.value.__cause__ is error

    with pytest.raises(StorageFailure, match="Error adding subject"):
        store.create_subject("Math")
    with pytest.raises(StorageFailure, match="Error updating attendance"):
        store.mark_absent(str(ObjectId()))
    with pytest.raises(StorageFailure, match="Error deleting subject"):
        store.delete_subject(str(ObjectId()))
