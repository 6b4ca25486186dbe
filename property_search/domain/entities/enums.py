"""Enums - fixed values shared across the system."""

from enum import Enum


class PropertyType(str, Enum):
    """Kind of property on the marketplace."""
    HOUSE = "HOUSE"
    CONDO = "CONDO"
    TOWNHOUSE = "TOWNHOUSE"
    APARTMENT = "APARTMENT"
    LOT = "LOT"
    COMMERCIAL = "COMMERCIAL"
    WAREHOUSE = "WAREHOUSE"
    FARM = "FARM"


class TransactionType(str, Enum):
    """Whether the listing is for sale or for rent."""
    SALE = "SALE"
    RENT = "RENT"


class PropertyStatus(str, Enum):
    """Listing lifecycle. Only AVAILABLE listings are public."""
    DRAFT = "DRAFT"            # Being written by the agent
    AVAILABLE = "AVAILABLE"    # Published
    RESERVED = "RESERVED"      # Buyer/tenant holding it
    SOLD = "SOLD"
    RENTED = "RENTED"
    UNLISTED = "UNLISTED"      # Taken down by the agent or a moderator


class Furnishing(str, Enum):
    UNFURNISHED = "UNFURNISHED"
    SEMI_FURNISHED = "SEMI_FURNISHED"
    FULLY_FURNISHED = "FULLY_FURNISHED"
