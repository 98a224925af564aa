"""Protean Engine runner for the ordering domain.

Starts Engine workers that process events asynchronously in production:
- OutboxProcessor: polls the outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes the notification handlers

Usage:
    PROTEAN_ENV=production python src/server.py
    PROTEAN_ENV=production python src/server.py --test-mode   # drain and exit
"""

import argparse
import asyncio

from protean.server.engine import Engine


def main():
    parser = argparse.ArgumentParser(description="Kamisori Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages and exit",
    )
    args = parser.parse_args()

    from ordering.domain import ordering

    ordering.init()
    asyncio.run(Engine(ordering, test_mode=args.test_mode).run())


if __name__ == "__main__":
    main()
