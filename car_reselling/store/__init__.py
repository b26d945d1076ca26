"""In-memory data stores for maintaining entity relationships."""

from car_reselling.store.inventory import InventoryStore

__all__ = ["InventoryStore"]
