#!/usr/bin/env python3
"""
Seed the quiz question bank and the DSA problem bank.

Usage: python scripts/seed_data.py [--questions data/questions.json] [--problems data/question_details.csv]
"""
import argparse
import sys
sys.path.insert(0, '.')

from careerconnect.core.config import get_settings
from careerconnect.core.logging_config import setup_logging
from careerconnect.db.mongodb import init_mongo_indexes
from careerconnect.services.seed_service import seed_quiz_questions, seed_dsa_problems


def main():
    parser = argparse.ArgumentParser(description="Seed question banks")
    parser.add_argument("--questions", default="data/questions.json")
    parser.add_argument("--problems", default="data/question_details.csv")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_mongo_indexes()

    print("[1] Seeding quiz questions...")
    stats = seed_quiz_questions(args.questions)
    print(f"    inserted {stats['inserted']}, skipped {stats['skipped']}")

    print("[2] Seeding DSA problems...")
    stats = seed_dsa_problems(args.problems)
    print(f"    inserted {stats['inserted']}, skipped {stats['skipped']}")


if __name__ == "__main__":
    main()
