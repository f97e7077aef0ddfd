#!/usr/bin/env python3
"""Print a development JWT for calling the vote API.

Usage:
    python scripts/issue_token.py <user-id> [user|moderator]
"""

import argparse
import sys
from uuid import UUID

from forum.config import Settings
from forum.domain.value import Role
from forum.util.jwt import create_token


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id", type=UUID)
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args()

    settings = Settings()
    if settings.environment == "production":
        print("Refusing to issue tokens in production", file=sys.stderr)
        return 1

    print(create_token(str(args.user_id), Role(args.role), settings.auth))
    return 0


if __name__ == "__main__":
    sys.exit(main())
