#!/usr/bin/env python3
"""
Connection Check Script

Verifies MongoDB and the Groq API are reachable with the current settings.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from careerconnect.db.mongodb import test_mongo_connection
from careerconnect.services.groq_client import get_groq_client
from careerconnect.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("CAREERCONNECT - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    MongoDB: CONNECTED")
    else:
        print("    MongoDB: FAILED")

    print("\n[2] Checking Groq API...")
    client = get_groq_client()
    if client.is_configured:
        print(f"    Base URL: {settings.groq_base_url}")
        if client.test_connection():
            print("    Groq: CONNECTED")
        else:
            print("    Groq: FAILED")
    else:
        print("    Groq: GROQ_API_KEY not configured (AI features disabled)")

    print("\n[3] Cloudinary...")
    if settings.cloudinary_cloud_name:
        print(f"    Cloud name: {settings.cloudinary_cloud_name}")
    else:
        print("    Cloudinary: not configured (uploads will fail)")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
