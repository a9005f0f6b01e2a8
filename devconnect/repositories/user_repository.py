"""User repository for account removal."""

from devconnect.logging import get_logger
from devconnect.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


class UserRepository(BaseRepository[User]):
    model = User

    def delete_by_id(self, user_id: int) -> bool:
        """Delete a user. Returns False when no such user exists."""
        removed = self.delete(user_id)
        if not removed:
            logger.info("user_delete_noop", user_id=user_id)
        return removed
