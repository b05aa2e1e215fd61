"""User and order data layer for labwork."""

from .database import Database
from .models import Order, User, UserOrderSummary
from .service import ACTIVE_USERS_CACHE_KEY, UserService

__all__ = [
    "ACTIVE_USERS_CACHE_KEY",
    "Database",
    "Order",
    "User",
    "UserOrderSummary",
    "UserService",
]
