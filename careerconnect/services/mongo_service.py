"""
MongoDB Service - CRUD operations for the portal collections.

Collections in this database:
1. students        - Student accounts, with embedded quizAttempts,
                     dsaAttempts and atsScans histories
2. admins          - Placement-cell admin accounts
3. companies       - Recruiter accounts
4. announcements   - Notices and placement drives
5. quiz_questions  - Aptitude/technical question bank
6. dsa_problems    - Coding practice problem bank

Services never return password hashes; serialize_doc strips them.
"""

import math
import re
from datetime import datetime
from typing import Optional, List, Dict, Any
from bson import ObjectId
from pymongo import ReturnDocument, DESCENDING
from pymongo.collection import Collection

from careerconnect.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPERS
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict (no password)."""
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    doc.pop("password", None)
    return doc


def serialize_docs(docs) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """ObjectId for a valid 24-hex string, else None."""
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def contains(text: str) -> re.Pattern:
    """Case-insensitive substring match on user-supplied text."""
    return re.compile(re.escape(text), re.IGNORECASE)


def exact_ci(text: str) -> re.Pattern:
    """Case-insensitive whole-value match (used for usernames)."""
    return re.compile(f"^{re.escape(text)}$", re.IGNORECASE)


def paginate(
    collection: Collection,
    query: dict,
    page: int,
    limit: int,
    projection: dict = None,
    sort: list = None
) -> dict:
    """
    Page through a query.

    Returns:
        {"data": [...], "pagination": {"totalRecords", "currentPage", "totalPages", "limit"}}
    """
    total = collection.count_documents(query)
    cursor = collection.find(query, projection)
    if sort:
        cursor = cursor.sort(sort)
    cursor = cursor.skip((page - 1) * limit).limit(limit)
    return {
        "data": serialize_docs(cursor),
        "pagination": {
            "totalRecords": total,
            "currentPage": page,
            "totalPages": math.ceil(total / limit) if limit else 0,
            "limit": limit
        }
    }


# ============================================================
# ACCOUNTS (students, admins, companies share the lookup logic)
# ============================================================

class _AccountService:
    collection_key: str = None

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS[self.collection_key])

    def insert(self, doc: dict) -> str:
        """
        Insert an account. Raises pymongo DuplicateKeyError when the
        username/email is already taken.
        """
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def find_with_password(self, username: str) -> Optional[dict]:
        """Raw document including the hash, for login checks only."""
        return self.collection.find_one({"username": username})

    def get_by_username(self, username: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"username": username}))

    def update(self, username: str, fields: Dict[str, Any]) -> Optional[dict]:
        """Set the given fields; returns the updated document or None."""
        if not fields:
            return self.get_by_username(username)
        doc = self.collection.find_one_and_update(
            {"username": username},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


class StudentService(_AccountService):
    """
    Student accounts plus their embedded activity histories.
    """
    collection_key = "students"

    def register(self, data: dict, password_hash: str) -> str:
        doc = {
            **data,
            "password": password_hash,
            "city": "",
            "profilePicture": "",
            "createdAt": datetime.utcnow(),
            "quizAttempts": [],
            "dsaAttempts": [],
            "atsScans": []
        }
        return self.insert(doc)

    def list(self, page: int, limit: int, search: str = "", department: str = "") -> dict:
        query = {}
        if search:
            pattern = contains(search)
            query["$or"] = [
                {"name": pattern},
                {"username": pattern},
                {"email": pattern}
            ]
        if department and department != "All":
            query["department"] = department
        return paginate(self.collection, query, page, limit)

    def count(self) -> int:
        return self.collection.count_documents({})

    def delete(self, username: str) -> bool:
        result = self.collection.delete_one({"username": username})
        return result.deleted_count > 0

    def get_by_username_ci(self, username: str, projection: dict = None) -> Optional[dict]:
        """Case-insensitive exact username lookup."""
        doc = self.collection.find_one({"username": exact_ci(username)}, projection)
        return serialize_doc(doc)

    def push_quiz_attempt(self, username: str, attempt: dict) -> bool:
        result = self.collection.update_one(
            {"username": username},
            {"$push": {"quizAttempts": attempt}}
        )
        return result.matched_count > 0

    def push_dsa_attempt(self, username: str, attempt: dict) -> bool:
        result = self.collection.update_one(
            {"username": username},
            {"$push": {"dsaAttempts": attempt}}
        )
        return result.matched_count > 0

    def push_ats_scan(self, username: str, scan: dict) -> Optional[dict]:
        """Append a scan to the student matched case-insensitively."""
        doc = self.collection.find_one_and_update(
            {"username": exact_ci(username)},
            {"$push": {"atsScans": scan}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def get_quiz_attempts(self, username: str) -> Optional[List[dict]]:
        doc = self.collection.find_one({"username": username}, {"quizAttempts": 1})
        if doc is None:
            return None
        return doc.get("quizAttempts") or []

    def get_dsa_attempts(self, username: str) -> Optional[List[dict]]:
        doc = self.collection.find_one({"username": username}, {"dsaAttempts": 1})
        if doc is None:
            return None
        return doc.get("dsaAttempts") or []

    def list_usernames(self) -> List[str]:
        return [doc["username"] for doc in self.collection.find({}, {"username": 1})]


class AdminService(_AccountService):
    """Placement-cell admin accounts."""
    collection_key = "admins"

    def register(self, data: dict, password_hash: str) -> str:
        return self.insert({**data, "password": password_hash})


class CompanyService(_AccountService):
    """Recruiter accounts."""
    collection_key = "companies"

    def register(self, data: dict, password_hash: str) -> str:
        return self.insert({**data, "password": password_hash})

    def list(self, page: int, limit: int, search: str = "") -> dict:
        query = {}
        if search:
            pattern = contains(search)
            query["$or"] = [{"name": pattern}, {"email": pattern}]
        return paginate(self.collection, query, page, limit, projection={"password": 0})

    def delete(self, company_id: str) -> bool:
        oid = to_object_id(company_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0


# ============================================================
# ANNOUNCEMENTS COLLECTION
# ============================================================

class AnnouncementService:
    """
    Notices and placement drives. Drives carry the optional company,
    role, package, location, date, batch, eligibility and applyLink fields.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["announcements"])

    def create(self, data: dict) -> str:
        doc = {
            **data,
            "status": "Active",
            "createdAt": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list(self, page: int, limit: int) -> dict:
        return paginate(self.collection, {}, page, limit, sort=[("createdAt", DESCENDING)])

    def get(self, announcement_id: str) -> Optional[dict]:
        oid = to_object_id(announcement_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def update(self, announcement_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        oid = to_object_id(announcement_id)
        if oid is None:
            return None
        if not fields:
            return self.get(announcement_id)
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete(self, announcement_id: str) -> bool:
        oid = to_object_id(announcement_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0


# ============================================================
# QUIZ QUESTIONS COLLECTION
# ============================================================

class QuizQuestionService:
    """Aptitude/technical question bank."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["quiz_questions"])

    @staticmethod
    def build_query(category: str = None, search: str = None) -> dict:
        query = {}
        if category:
            query["category"] = contains(category)
        if search:
            query["question_text"] = contains(search)
        return query

    def find(self, query: dict) -> List[dict]:
        return serialize_docs(self.collection.find(query))

    def paginate(self, query: dict, page: int, limit: int) -> dict:
        return paginate(self.collection, query, page, limit)

    def exists(self, question_text: str) -> bool:
        return self.collection.find_one({"question_text": question_text}) is not None

    def insert(self, data: dict) -> dict:
        doc = dict(data)
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def delete(self, question_id: str) -> bool:
        oid = to_object_id(question_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count > 0

    def find_by_ids(self, question_ids: List[str]) -> Dict[str, dict]:
        """Map of id string -> question for every valid, existing id."""
        oids = [oid for oid in (to_object_id(q) for q in question_ids) if oid is not None]
        if not oids:
            return {}
        return {str(doc["_id"]): doc for doc in self.collection.find({"_id": {"$in": oids}})}

    def count(self) -> int:
        return self.collection.count_documents({})


# ============================================================
# DSA PROBLEMS COLLECTION
# ============================================================

class DSAProblemService:
    """Coding practice problem bank."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["dsa_problems"])

    def get_by_id_or_slug(self, qid: str) -> Optional[dict]:
        """Look up by ObjectId first, then by titleSlug."""
        doc = None
        oid = to_object_id(qid)
        if oid is not None:
            doc = self.collection.find_one({"_id": oid})
        if doc is None:
            doc = self.collection.find_one({"titleSlug": qid})
        return serialize_doc(doc)

    @staticmethod
    def build_query(difficulty: str = None, topic: str = None, search: str = None) -> dict:
        query = {}
        if difficulty:
            query["difficulty"] = difficulty
        if topic:
            query["topics"] = contains(topic)
        if search:
            pattern = contains(search)
            query["$or"] = [{"title": pattern}, {"topics": pattern}]
            oid = to_object_id(search)
            if oid is not None:
                query["$or"].append({"_id": oid})
        return query

    def list(self, query: dict, page: int, limit: int) -> tuple:
        """Returns (total, documents) for one page."""
        total = self.collection.count_documents(query)
        cursor = self.collection.find(query).skip((page - 1) * limit).limit(limit)
        return total, serialize_docs(cursor)

    def exists(self, title: str) -> bool:
        return self.collection.find_one({"title": title}) is not None

    def insert(self, data: dict) -> dict:
        doc = {**data, "createdAt": datetime.utcnow()}
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def delete(self, problem_id: str) -> bool:
        oid = to_object_id(problem_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count > 0

    def count(self) -> int:
        return self.collection.count_documents({})
