"""Create a user and print a freshly issued API key.

Usage:
    python scripts/create_user.py USERNAME [--email EMAIL] [--role ROLE]
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from sqlalchemy import select

from xxml_cms.auth.api_key import create_api_key
from xxml_cms.database import AsyncSessionLocal, engine
from xxml_cms.models.user import USER_ROLES, User


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user with an API key")
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    parser.add_argument("--display-name", default=None)
    parser.add_argument("--role", choices=USER_ROLES, default="USER")
    return parser.parse_args()


async def main() -> int:
    args = _parse_args()
    try:
        async with AsyncSessionLocal() as session:
            existing = await session.scalar(select(User.id).where(User.username == args.username))
            if existing is not None:
                print(f"User '{args.username}' already exists.", file=sys.stderr)
                return 1

            user = User(
                username=args.username,
                email=args.email,
                display_name=args.display_name,
                role=args.role,
            )
            session.add(user)
            await session.flush()
            api_key = await create_api_key(session, user, name="cli")
            await session.commit()
    finally:
        await engine.dispose()

    print(f"Created {args.role} '{args.username}'")
    print(f"API key (shown once): {api_key}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
