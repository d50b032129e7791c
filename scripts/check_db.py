#!/usr/bin/env python3
"""
Question bank check: counts and one sample from each bank.
Run: python scripts/check_db.py
"""
import sys
sys.path.insert(0, '.')

from careerconnect.db.mongodb import test_mongo_connection, get_collection, COLLECTIONS
from careerconnect.services.mongo_service import QuizQuestionService, DSAProblemService, StudentService


def main():
    if not test_mongo_connection():
        print("MongoDB not reachable. Check MONGODB_URI.")
        sys.exit(1)

    print(f"Quiz questions: {QuizQuestionService().count()}")
    print(f"DSA problems:   {DSAProblemService().count()}")
    print(f"Students:       {StudentService().count()}")

    sample = get_collection(COLLECTIONS["quiz_questions"]).find_one()
    if sample:
        print(f"\nSample question: {sample.get('question_text')} [{sample.get('category')}]")

    sample = get_collection(COLLECTIONS["dsa_problems"]).find_one()
    if sample:
        print(f"Sample problem:  {sample.get('title')} ({sample.get('difficulty')})")


if __name__ == "__main__":
    main()
