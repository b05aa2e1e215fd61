"""
User Service Module

Queries and batch inserts over the user/order Database, with the active
users query cached in a MemoryCache. Database calls run in a worker
thread so the service can be awaited from asyncio code.
"""

import asyncio
import logging
from typing import List

from ..cache.memory import MemoryCache
from ..config.settings import settings
from .database import Database
from .models import Order, User, UserOrderSummary

logger = logging.getLogger(__name__)

ACTIVE_USERS_CACHE_KEY = "ActiveUsersCache"


class UserService:
    """
    Service for working with users and their orders.

    Attributes:
        database: The Database holding users and orders
        cache: MemoryCache for cached queries
        cache_ttl: Absolute expiration for cached queries, in seconds
    """

    def __init__(
            self,
            database: Database,
            cache: MemoryCache = None,
            cache_ttl: float = None,
    ):
        self.database = database
        self.cache = cache if cache is not None else MemoryCache()
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.CACHE_TTL

    async def add_users(self, users: List[User]) -> None:
        """
        Insert users and their orders in a single transaction.

        Ids are assigned back onto the User and Order objects once the
        transaction commits. If any insert fails nothing is persisted and
        the database error is re-raised.
        """
        assigned = await asyncio.to_thread(self._insert_users, users)

        for user, (user_id, order_ids) in zip(users, assigned):
            user.id = user_id
            for order, order_id in zip(user.orders, order_ids):
                order.user_id = user_id
                order.id = order_id

        logger.info(f"Added {len(users)} users")

    def _insert_users(self, users: List[User]) -> List[tuple]:
        assigned = []
        with self.database.transaction() as conn:
            for user in users:
                cur = conn.execute(
                    "INSERT INTO users (name, email, is_active) VALUES (?, ?, ?)",
                    user.to_insert_tuple(),
                )
                user_id = cur.lastrowid
                order_ids = [
                    self._insert_order(conn, user_id, order.product_name, order.quantity)
                    for order in user.orders
                ]
                assigned.append((user_id, order_ids))
        return assigned

    @staticmethod
    def _insert_order(conn, user_id: int, product_name: str, quantity: int) -> int:
        cur = conn.execute(
            "INSERT INTO orders (product_name, quantity, user_id) VALUES (?, ?, ?)",
            (product_name, quantity, user_id),
        )
        return cur.lastrowid

    async def add_order(self, user_id: int, product_name: str, quantity: int) -> Order:
        """Place an order for an existing user."""
        def insert() -> int:
            with self.database.transaction() as conn:
                return self._insert_order(conn, user_id, product_name, quantity)

        order_id = await asyncio.to_thread(insert)
        return Order(product_name=product_name, quantity=quantity, user_id=user_id, id=order_id)

    async def get_active_users(self) -> List[User]:
        """Get all active users, without their orders."""
        rows = await asyncio.to_thread(
            self.database.query,
            "SELECT id, name, email, is_active FROM users WHERE is_active = 1 ORDER BY id",
        )
        return [User.from_row(row) for row in rows]

    async def get_users_with_orders(self) -> List[UserOrderSummary]:
        """Get the order count of every user with at least one order."""
        rows = await asyncio.to_thread(
            self.database.query,
            """
            SELECT u.name AS name, COUNT(o.id) AS total_orders
            FROM users u
            JOIN orders o ON o.user_id = u.id
            GROUP BY u.id
            ORDER BY u.id
            """,
        )
        return [UserOrderSummary(name=row["name"], total_orders=row["total_orders"]) for row in rows]

    async def get_cached_active_users(self) -> List[User]:
        """
        Get active users, served from the cache for `cache_ttl` seconds.

        The cached list is not refreshed by later inserts until it expires.
        """
        return await self.cache.get_or_set_async(
            ACTIVE_USERS_CACHE_KEY,
            self.get_active_users,
            ttl=self.cache_ttl,
        )
