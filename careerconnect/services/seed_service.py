"""
Seed Service - load the quiz question bank and DSA problem bank.

Sources:
- questions.json: [{"question_text", "options", "correct_answer", "category", "explanation"}]
- question_details.csv: columns QID,title,titleSlug,difficulty,Hints,Companies,
  topics,SimilarQuestions,Code,Body,isPaidOnly (only a subset is stored)

Existing rows are skipped: quiz questions by question_text, problems by title.
"""
import csv
import json
import logging
import os
from typing import Dict

from careerconnect.services.mongo_service import QuizQuestionService, DSAProblemService

logger = logging.getLogger(__name__)


def seed_quiz_questions(path: str) -> Dict[str, int]:
    """Returns {"inserted": n, "skipped": m}."""
    stats = {"inserted": 0, "skipped": 0}
    if not os.path.exists(path):
        logger.warning("No quiz question file found at %s", path)
        return stats

    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    logger.info("Found %d quiz questions to process", len(rows))

    service = QuizQuestionService()
    for row in rows:
        if service.exists(row["question_text"]):
            stats["skipped"] += 1
            continue
        service.insert({
            "question_text": row["question_text"],
            "options": row.get("options", []),
            "correct_answer": row["correct_answer"],
            "category": row.get("category") or "General",
            "explanation": row.get("explanation") or "",
            "difficulty": "Medium"
        })
        stats["inserted"] += 1
    return stats


def seed_dsa_problems(path: str) -> Dict[str, int]:
    """Returns {"inserted": n, "skipped": m}."""
    stats = {"inserted": 0, "skipped": 0}
    if not os.path.exists(path):
        logger.warning("No DSA problem file found at %s", path)
        return stats

    service = DSAProblemService()
    with open(path, encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            title = (row.get("title") or "").strip()
            if not title:
                continue
            if service.exists(title):
                stats["skipped"] += 1
                continue
            service.insert({
                "title": title,
                "titleSlug": row.get("titleSlug"),
                "difficulty": row.get("difficulty") or "Easy",
                # stored as the raw CSV string, e.g. "['Array', 'Hash Table']"
                "topics": row.get("topics"),
                "Body": row.get("Body"),
                "examples": []
            })
            stats["inserted"] += 1
    return stats
