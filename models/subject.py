import logging

import pymongo
from bson import ObjectId
from pymongo.errors import PyMongoError

from utils.errors import InvalidInput, NotFound, StorageFailure, Unavailable

logger = logging.getLogger(__name__)

COUNTER_FIELDS = ("attended", "absent")


def parse_subject_id(raw_id):
    """Turn a caller-supplied id string into an ObjectId, or raise InvalidInput."""
    if not isinstance(raw_id, str) or not ObjectId.is_valid(raw_id):
        raise InvalidInput("Invalid subject id")
    return ObjectId(raw_id)


def validate_subject_name(name):
    if not isinstance(name, str) or name == "":
        raise InvalidInput("Subject name is required")
    return name


class Subject:

    def __init__(self, name, attended=0, absent=0, id=None):
        self.id = id
        self.name = name
        self.attended = attended
        self.absent = absent

    # Document written to MongoDB (the _id is assigned by the server)
    def to_dict(self):
        return {
            "name": self.name,
            "attended": self.attended,
            "absent": self.absent,
        }

    # Shape returned to API callers
    def to_json(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "attended": self.attended,
            "absent": self.absent,
        }

    @classmethod
    def from_document(cls, doc):
        return cls(
            id=doc["_id"],
            name=doc.get("name"),
            attended=doc.get("attended", 0),
            absent=doc.get("absent", 0),
        )


class SubjectStore:
    """
    All reads and writes of the subjects collection go through here.

    The store starts detached and is attached to a collection once the
    database is reachable. Every method issues exactly one collection call,
    bounded by pymongo.timeout(), and maps driver errors to StorageFailure.
    """

    def __init__(self, collection=None, timeout=None):
        self._collection = collection
        self._timeout = timeout

    def attach(self, collection):
        self._collection = collection

    @property
    def ready(self):
        return self._collection is not None

    def _require_collection(self):
        collection = self._collection
        if collection is None:
            raise Unavailable()
        return collection

    def list_subjects(self):
        collection = self._require_collection()
        try:
            with pymongo.timeout(self._timeout):
                docs = list(collection.find({}, sort=[("_id", pymongo.ASCENDING)]))
        except PyMongoError as e:
            logger.exception("Reading subjects failed")
            raise StorageFailure("Error fetching subjects") from e
        return [Subject.from_document(doc) for doc in docs]

    def create_subject(self, name):
        subject = Subject(name=validate_subject_name(name))
        collection = self._require_collection()
        try:
            with pymongo.timeout(self._timeout):
                result = collection.insert_one(subject.to_dict())
        except PyMongoError as e:
            logger.exception("Inserting subject %r failed", subject.name)
            raise StorageFailure("Error adding subject") from e

        subject.id = result.inserted_id
        logger.info("Created subject %s (%s)", subject.id, subject.name)
        return subject

    def increment(self, raw_id, field):
        if field not in COUNTER_FIELDS:
            raise ValueError(f"Unknown counter field: {field}")
        subject_id = parse_subject_id(raw_id)
        collection = self._require_collection()
        try:
            with pymongo.timeout(self._timeout):
                result = collection.update_one(
                    {"_id": subject_id},
                    {"$inc": {field: 1}},
                )
        except PyMongoError as e:
            logger.exception("Incrementing %s on subject %s failed", field, subject_id)
            raise StorageFailure("Error updating attendance") from e

        if result.matched_count == 0:
            raise NotFound()

    def mark_present(self, raw_id):
        self.increment(raw_id, "attended")

    def mark_absent(self, raw_id):
        self.increment(raw_id, "absent")

    def delete_subject(self, raw_id):
        subject_id = parse_subject_id(raw_id)
        collection = self._require_collection()
        try:
            with pymongo.timeout(self._timeout):
                result = collection.delete_one({"_id": subject_id})
        except PyMongoError as e:
            logger.exception("Deleting subject %s failed", subject_id)
            raise StorageFailure("Error deleting subject") from e

        if result.deleted_count == 0:
            raise NotFound()
        logger.info("Deleted subject %s", subject_id)
