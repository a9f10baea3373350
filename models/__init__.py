# models/__init__.py

from .subject import Subject, SubjectStore, parse_subject_id, validate_subject_name

__all__ = [
    "Subject",
    "SubjectStore",
    "parse_subject_id",
    "validate_subject_name",
]
