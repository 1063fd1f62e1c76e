"""Domain enumerations for the merchandise API.

Enums represent fixed sets of domain values (user roles, order status,
listing sort options).
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried in the access token; gates admin-only writes."""

    ADMIN = "admin"
    USER = "user"
    MANAGER = "manager"


class OrderStatus(str, Enum):
    """Order fulfilment status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class SortField(str, Enum):
    """Product listing sort keys, as accepted in the sortBy query parameter."""

    NAME = "name"
    PRICE = "price"
    CREATED_AT = "createdAt"
    CATEGORY = "category"


class SortDirection(str, Enum):
    """Listing sort direction (sortOrder); lowercase input is upper-cased at the boundary."""

    ASC = "ASC"
    DESC = "DESC"
