#!/usr/bin/env python3
"""
Add randomized test ratings to every user in MongoDB.

Connection settings come from MONGODB_URL / MONGODB_DB_NAME (or .env).
Run with: python add_test_ratings.py
"""

from seeder.main import run

if __name__ == "__main__":
    run()
