"""Data models for the user/order store."""

import sqlite3
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class Order:
    """An order placed by a user."""
    product_name: str
    quantity: int
    user_id: Optional[int] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Order":
        return cls(
            product_name=row["product_name"],
            quantity=row["quantity"],
            user_id=row["user_id"],
            id=row["id"],
        )


@dataclass
class User:
    """A registered user. `id` is assigned by the database on insert."""
    name: str
    email: str
    is_active: bool = True
    orders: List[Order] = field(default_factory=list)
    id: Optional[int] = None

    def to_insert_tuple(self) -> Tuple:
        """Convert to tuple for database insertion."""
        return (self.name, self.email, int(self.is_active))

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "User":
        return cls(
            name=row["name"],
            email=row["email"],
            is_active=bool(row["is_active"]),
            id=row["id"],
        )


@dataclass
class UserOrderSummary:
    """Projection of a user to their order count."""
    name: str
    total_orders: int
