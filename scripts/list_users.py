#!/usr/bin/env python3
"""
List registered student usernames.
Run: python scripts/list_users.py
"""
import sys
sys.path.insert(0, '.')

from careerconnect.services.mongo_service import StudentService


def main():
    usernames = StudentService().list_usernames()
    print(f"{len(usernames)} students")
    for username in usernames:
        print(f"  - {username}")


if __name__ == "__main__":
    main()
