"""
DSA Service - slugs, problem listings and practice analytics.
"""
import re
from datetime import datetime, timedelta
from typing import List, Optional

ACTIVITY_WINDOW_DAYS = 7
SOLVED = "Solved"


def slugify(title: str) -> str:
    """'Two Sum II!' -> 'two-sum-ii'"""
    slug = title.lower().replace(" ", "-")
    return re.sub(r"[^\w-]+", "", slug, flags=re.ASCII)


def default_slug(title: str) -> str:
    """Fallback slug for listings of problems seeded without one."""
    return (title or "").lower().replace(" ", "-")


def summarize_problem(doc: dict) -> dict:
    return {
        "QID": doc["_id"],
        "title": doc.get("title"),
        "difficulty": doc.get("difficulty"),
        "topics": doc.get("topics"),
        "titleSlug": doc.get("titleSlug") or default_slug(doc.get("title"))
    }


def build_attempt(qid: Optional[str], title: Optional[str], difficulty: Optional[str], status: Optional[str]) -> dict:
    return {
        "qid": qid,
        "title": title,
        "difficulty": difficulty,
        "status": status,
        "timestamp": datetime.utcnow()
    }


def _date_key(value) -> Optional[str]:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, str) and value:
        return value[:10]
    return None


def compute_analytics(attempts: List[dict], today: datetime = None) -> dict:
    """
    Dashboard numbers for a student's DSA history.

    - totalSolved: unique qids with a Solved attempt
    - difficultySplit: unique solved (qid, difficulty) pairs per level
    - accuracy: solved attempts / all attempts, percent, one decimal
    - recentActivity: attempts per UTC date, last 7 days, oldest first
    """
    today = today or datetime.utcnow()
    total_attempts = len(attempts)
    solved = [a for a in attempts if a.get("status") == SOLVED]
    total_solved = len({a.get("qid") for a in solved})

    solved_pairs = {(a.get("qid"), a.get("difficulty")) for a in solved}
    difficulty_split = {
        level: sum(1 for _, diff in solved_pairs if diff == level)
        for level in ("Easy", "Medium", "Hard")
    }

    accuracy = round(len(solved) / total_attempts * 100, 1) if total_attempts else 0

    counts = {}
    for attempt in attempts:
        key = _date_key(attempt.get("timestamp"))
        if key:
            counts[key] = counts.get(key, 0) + 1

    days = [
        (today - timedelta(days=offset)).date().isoformat()
        for offset in range(ACTIVITY_WINDOW_DAYS - 1, -1, -1)
    ]
    recent_activity = [{"date": day, "count": counts.get(day, 0)} for day in days]

    return {
        "totalSolved": total_solved,
        "totalAttempts": total_attempts,
        "accuracy": accuracy,
        "difficultySplit": difficulty_split,
        "recentActivity": recent_activity
    }
