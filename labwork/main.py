#!/usr/bin/env python3
"""
Labwork Demo Entry Point

Runs the file I/O and Fibonacci demo, then the user/order demo.

Usage:
    python -m labwork.main                        # Default settings
    python -m labwork.main --data-file out.txt    # Custom data file
    python -m labwork.main --count 30             # Print F(0) .. F(29)
    python -m labwork.main --skip-users           # Only the file/sequence demo
    python -m labwork.main --debug                # Enable debug logging

Environment Variables:
    LABWORK_DATA_FILE       - Data file path
    LABWORK_DATA_MESSAGE    - Line appended to the data file
    LABWORK_SEQUENCE_COUNT  - Number of Fibonacci terms to print
    LABWORK_CACHE_TTL       - Active users cache expiration (seconds)
    LABWORK_DEBUG           - Enable debug mode (true/false)
"""

import argparse
import asyncio
import logging
import sys
from typing import List

from .cache.memory import MemoryCache
from .config.settings import settings
from .sequence.evaluator import FibonacciEvaluator
from .textio.lines import LineFile
from .users.database import Database
from .users.models import Order, User
from .users.service import UserService

logger = logging.getLogger(__name__)


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Labwork: async file I/O, memoized Fibonacci and user store demos",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--data-file",
        type=str,
        default=settings.DATA_FILE,
        help="Text file to append to and read back",
    )

    parser.add_argument(
        "--message",
        type=str,
        default=settings.DATA_MESSAGE,
        help="Line appended to the data file",
    )

    parser.add_argument(
        "--count",
        type=int,
        default=settings.SEQUENCE_COUNT,
        help="Number of Fibonacci terms to print",
    )

    parser.add_argument(
        "--skip-users",
        action="store_true",
        help="Skip the user/order demo",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


async def run_file_demo(path: str, message: str) -> None:
    """Append `message` to the data file, then print the file back."""
    data = LineFile(path)
    await data.write_line(message)
    print("Data successfully written to file")
    await data.echo()


def print_sequence(evaluator: FibonacciEvaluator, count: int) -> None:
    """Print F(i) for i = 0 .. count - 1, one per line."""
    print("Fibonacci sequence: ")
    for i in range(count):
        print(f"F({i}) = {evaluator.evaluate(i)}")


def sample_users() -> List[User]:
    return [
        User(name="Alice", email="alice@example.com", is_active=True,
             orders=[Order(product_name="Laptop", quantity=1), Order(product_name="Mouse", quantity=2)]),
        User(name="Bob", email="bob@example.com", is_active=False,
             orders=[Order(product_name="Keyboard", quantity=1)]),
        User(name="Charlie", email="charlie@example.com", is_active=True),
    ]


async def run_users_demo(service: UserService) -> None:
    """Seed the user store and print the active users and order counts."""
    await service.add_users(sample_users())

    print("Active Users:")
    for user in await service.get_cached_active_users():
        print(f"{user.name} - {user.email}")

    print("Users with Orders:")
    for summary in await service.get_users_with_orders():
        print(f"{summary.name} - Orders: {summary.total_orders}")


async def run(args: argparse.Namespace) -> None:
    """Run all demos in order."""
    await run_file_demo(args.data_file, args.message)

    evaluator = FibonacciEvaluator()
    print_sequence(evaluator, args.count)
    logger.debug(f"Evaluator stats: {evaluator.get_stats()}")

    if args.skip_users:
        return

    database = Database()
    try:
        service = UserService(database, MemoryCache())
        await run_users_demo(service)
        logger.debug(f"Cache stats: {service.cache.get_stats()}")
    finally:
        database.close()


def main(argv: List[str] = None) -> None:
    """Main entry point for the demos."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)

    logger.info("Starting labwork demos")
    logger.info(f"  Data file: {args.data_file}")
    logger.info(f"  Sequence terms: {args.count}")
    logger.info(f"  Debug: {args.debug}")

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    except Exception as e:
        logger.error(f"Demo error: {e}")
        raise


if __name__ == "__main__":
    main()
