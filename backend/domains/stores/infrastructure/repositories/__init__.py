"""Stores Domain - Repository Implementations"""

from domains.stores.infrastructure.repositories.moderator_store_comment_repository import (
    ModeratorStoreCommentRepository,
)
from domains.stores.infrastructure.repositories.store_repository import StoreRepository

__all__ = ["ModeratorStoreCommentRepository", "StoreRepository"]
