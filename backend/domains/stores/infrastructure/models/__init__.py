"""Stores Domain - ORM Models"""

from domains.stores.infrastructure.models.moderator_store_comment import ModeratorStoreComment
from domains.stores.infrastructure.models.store import Store

__all__ = ["ModeratorStoreComment", "Store"]
