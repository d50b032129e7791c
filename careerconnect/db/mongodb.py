"""
MongoDB Connection Utility

MongoDB stores every portal entity:
- Students (with embedded quiz, DSA and ATS history)
- Admins and companies
- Announcements / placement drives
- Quiz question bank and DSA problem bank

WHY MongoDB for these?
- Attempt histories are naturally embedded arrays on the student
- Announcements carry optional drive fields that vary per post
- No joins needed: each document is self-contained
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from careerconnect.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri, serverSelectionTimeoutMS=5000)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "admins": "admins",
    "companies": "companies",
    "announcements": "announcements",
    "quiz_questions": "quiz_questions",
    "dsa_problems": "dsa_problems",
}


def init_mongo_indexes():
    """
    Create indexes, including the uniqueness constraints registration relies on.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["students"]].create_index("username", unique=True)
    db[COLLECTIONS["students"]].create_index("email", unique=True)

    db[COLLECTIONS["admins"]].create_index("username", unique=True)
    db[COLLECTIONS["admins"]].create_index("email", unique=True)

    # Companies may register without a username in old data
    db[COLLECTIONS["companies"]].create_index("username", unique=True, sparse=True)

    db[COLLECTIONS["announcements"]].create_index([("createdAt", DESCENDING)])

    db[COLLECTIONS["quiz_questions"]].create_index("question_text")
    db[COLLECTIONS["quiz_questions"]].create_index("category")

    db[COLLECTIONS["dsa_problems"]].create_index("title")
    db[COLLECTIONS["dsa_problems"]].create_index([("titleSlug", ASCENDING)])

    logger.info("MongoDB indexes created successfully")
