#!/usr/bin/env python
"""Create the PostgreSQL database named in `DATABASE_URL`.

Usage:
  python scripts/create_database.py [--password PASSWORD]
"""
import argparse
import os
import sys
from getpass import getpass

# Ensure project root is on sys.path so `hackhub` package can be imported
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import psycopg2
from psycopg2 import OperationalError, sql
from sqlalchemy.engine import make_url

from hackhub.config import settings

ADMIN_DB = "postgres"


def connect_admin(url, password):
    return psycopg2.connect(
        dbname=ADMIN_DB,
        user=url.username,
        password=password,
        host=url.host or "localhost",
        port=url.port or 5432,
    )


def ensure_database(conn, name: str) -> bool:
    """Create `name` unless it exists; True when it was created"""
    conn.autocommit = True
    with conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (name,))
        if cur.fetchone():
            return False
        cur.execute(sql.SQL("CREATE DATABASE {};").format(sql.Identifier(name)))
    return True


def main():
    url = make_url(settings.DATABASE_URL)
    if not url.drivername.startswith("postgresql"):
        print(f"DATABASE_URL is not PostgreSQL ({url.drivername}); nothing to create.")
        return
    if not url.database:
        print("No database name found in DATABASE_URL")
        sys.exit(1)

    parser = argparse.ArgumentParser()
    parser.add_argument("--password", "-p", help="Postgres admin password")
    args = parser.parse_args()
    password = args.password or os.getenv("POSTGRES_PASSWORD") or url.password

    try:
        conn = connect_admin(url, password)
    except OperationalError:
        if not sys.stdin.isatty():
            print("Password authentication failed. Provide --password or POSTGRES_PASSWORD.")
            sys.exit(1)
        print(f"Password authentication failed. Enter the Postgres password for {url.username}:")
        try:
            conn = connect_admin(url, getpass())
        except OperationalError as e:
            print("Error connecting to Postgres:", e)
            sys.exit(1)

    try:
        if ensure_database(conn, url.database):
            print(f"Database '{url.database}' created.")
        else:
            print(f"Database '{url.database}' already exists.")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
