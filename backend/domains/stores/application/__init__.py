"""Stores Domain - Application Layer"""

from domains.stores.application.moderator_comment_use_case import ModeratorCommentUseCase
from domains.stores.application.store_use_case import StoreUseCase

__all__ = ["ModeratorCommentUseCase", "StoreUseCase"]
