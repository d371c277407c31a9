"""Print a bearer token for local testing.

Usage:
    python create_token.py <actor-id> [lifetime-days]
"""
import argparse

from event_planning_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue an access token for an actor id")
    parser.add_argument("actor_id", help="identifier placed in the token's sub claim")
    parser.add_argument("days", nargs="?", type=int, default=365, help="token lifetime in days")
    args = parser.parse_args()
    print(create_access_token({"sub": args.actor_id}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
