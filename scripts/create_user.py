"""
Script to create an account with any role
Run this to create the first admin or organizer accounts
"""

import sys
import asyncio
import argparse
import uuid
from datetime import datetime, timezone
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from hackhub.auth import Role, hash_password, generate_random_password
from hackhub.auth.password import MIN_PASSWORD_LENGTH
from hackhub.database import database, connect_db, disconnect_db


async def create_user(email: str, name: str, role: Role, password: str = None) -> bool:
    """
    Create an account

    Args:
        email: Account email
        name: Display name printed on certificates
        role: Account role
        password: Password (if None, one is generated and printed)
    """
    await connect_db()

    try:
        existing = await database.fetch_one(
            "SELECT id FROM users WHERE LOWER(email) = LOWER(:email)",
            {"email": email}
        )
        if existing:
            print(f"❌ An account with email {email} already exists!")
            return False

        generated = password is None
        if generated:
            password = generate_random_password(12)

        await database.execute(
            """
            INSERT INTO users (id, name, email, password_hash, role, created_at)
            VALUES (:id, :name, :email, :password_hash, :role, :created_at)
            """,
            {
                "id": str(uuid.uuid4()),
                "name": name,
                "email": email,
                "password_hash": hash_password(password),
                "role": role.value,
                "created_at": datetime.now(timezone.utc)
            }
        )

        print(f"✅ {role.value.capitalize()} account created!")
        print(f"   Email: {email}")
        print(f"   Name: {name}")
        if generated:
            print(f"   Password: {password}")
            print("   ⚠️  Save this password, it is not stored anywhere else.")
        return True

    finally:
        await disconnect_db()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create a HackHub account")
    parser.add_argument("--email", help="Account email")
    parser.add_argument("--name", help="Full name")
    parser.add_argument(
        "--role",
        choices=[role.value for role in Role],
        default=Role.ADMIN.value,
        help="Account role (default: admin)"
    )
    parser.add_argument("--password", help="Password (generated when omitted)")
    return parser.parse_args(argv)


async def main():
    args = parse_args()

    email = args.email or input("Enter email: ").strip()
    name = args.name or input("Enter full name: ").strip()

    if args.password is not None and len(args.password) < MIN_PASSWORD_LENGTH:
        print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters!")
        sys.exit(1)

    created = await create_user(email, name, Role(args.role), args.password)
    if not created:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
