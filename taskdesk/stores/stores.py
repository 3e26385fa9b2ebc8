# stores.py
"""
Thin wrappers over the MongoDB collections. They hold no business rules:
validation and authorization live in ``taskdesk.core``.
"""
from flask import current_app
from pymongo import ASCENDING, DESCENDING

from ..core.service import TaskService
from ..models.models import EMPLOYEE, normalize_email, utcnow
from ..utils.utils import get_db, validate_objectid

NEWEST_FIRST = [("createdAt", DESCENDING)]


class TaskStore:
    def __init__(self, collection):
        self.collection = collection

    def ensure_indexes(self):
        self.collection.create_index([("assignedTo", ASCENDING), ("createdAt", DESCENDING)])
        self.collection.create_index([("createdAt", DESCENDING)])

    def create(self, document):
        document = dict(document)
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def find_by_id(self, task_id):
        oid = validate_objectid(task_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid})

    def find_many(self, query=None, sort=None):
        cursor = self.collection.find(query or {})
        return list(cursor.sort(sort or NEWEST_FIRST))

    def replace(self, task_id, document):
        """Whole-document replace; the last writer wins."""
        oid = validate_objectid(task_id)
        if oid is None:
            return 0
        body = {k: v for k, v in document.items() if k != "_id"}
        return self.collection.replace_one({"_id": oid}, body).matched_count

    def delete_by_id(self, task_id):
        oid = validate_objectid(task_id)
        if oid is None:
            return 0
        return self.collection.delete_one({"_id": oid}).deleted_count


class AccountStore:
    def __init__(self, collection):
        self.collection = collection

    def ensure_indexes(self):
        self.collection.create_index("email", unique=True)

    def create(self, document):
        document = dict(document)
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def find_by_email(self, email):
        return self.collection.find_one({"email": normalize_email(email)})

    def find_employee(self, email):
        return self.collection.find_one({"email": normalize_email(email), "role": EMPLOYEE})

    def list_employees(self):
        return list(self.collection.find({"role": EMPLOYEE}).sort([("name", ASCENDING)]))


def get_task_store():
    return TaskStore(get_db().tasks)


def get_account_store():
    return AccountStore(get_db().users)


def get_task_service():
    return TaskService(get_task_store(), get_account_store(),
                       clock=current_app.config.get("CLOCK", utcnow))
