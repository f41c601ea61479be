"""Store capability and its SQL implementation."""

from bisbis.store.base import Store, StoreError
from bisbis.store.sql import SqlStore

__all__ = ["Store", "StoreError", "SqlStore"]
