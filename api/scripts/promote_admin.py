"""Grant the ADMIN role to an existing user.

Usage:
    python scripts/promote_admin.py USERNAME
"""

from __future__ import annotations

import argparse
import asyncio

from sqlalchemy import select

from xxml_cms.database import AsyncSessionLocal, engine
from xxml_cms.models.user import User


async def main() -> int:
    parser = argparse.ArgumentParser(description="Promote a user to ADMIN")
    parser.add_argument("username")
    args = parser.parse_args()

    try:
        async with AsyncSessionLocal() as session:
            user = await session.scalar(select(User).where(User.username == args.username))
            if user is None:
                print(f"User '{args.username}' not found.")
                print("\nExisting users:")
                result = await session.execute(
                    select(User.username, User.email, User.role).order_by(User.username)
                )
                for username, email, role in result.all():
                    print(f"  {username:<32} {email or '-':<32} {role}")
                return 1

            print(f"Found user: {user.username} {user.email or ''}".rstrip())
            print(f"Current role: {user.role}")
            user.role = "ADMIN"
            await session.commit()
    finally:
        await engine.dispose()

    print("Promoted to ADMIN successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
