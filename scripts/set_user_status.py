"""
Activate or deactivate a Fish Care account by mobile number.

Examples:
  python scripts/set_user_status.py 01712345678 inactive
  python scripts/set_user_status.py 01712345678 active --user-type farmer

Uses DATABASE_URL from the environment or backend/.env, same as the API.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from fishcare.accounts import set_status
from fishcare.database import AsyncSessionLocal, engine
from fishcare.logging_config import configure_logging

logger = logging.getLogger("fishcare.scripts.set_user_status")


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("mobile")
    parser.add_argument("status", help="active, inactive or any other lifecycle tag")
    parser.add_argument("--user-type", default=None)
    args = parser.parse_args(argv)

    configure_logging()
    try:
        async with AsyncSessionLocal() as session:
            users = await set_status(session, args.mobile, args.status, args.user_type)
    finally:
        await engine.dispose()

    if not users:
        logger.error("No account found for %s", args.mobile)
        return 1
    for user in users:
        logger.info("User %s (%s) is now %s", user.id, user.user_type, user.status)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
