"""Cache invalidation tied to the write session's commit.

Actions running on the request-scoped write session release only a
savepoint; the COMMIT happens when get_db_transactional tears down. A tag
invalidated before that point could be refilled from the still-visible
old rows by a concurrent reader, so invalidations are queued on the
session and replayed after the commit. Outside a transaction they run
immediately.
"""

import functools
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.interfaces.services import ICacheInvalidator
from storefront.infrastructure.persistence.database import after_commit

logger = logging.getLogger(__name__)


class PostCommitInvalidator:
    """ICacheInvalidator that defers to the wrapped cache until commit."""

    def __init__(self, cache: ICacheInvalidator, session: AsyncSession) -> None:
        self.cache = cache
        self.session = session

    async def invalidate(self, tag: str) -> int:
        if not self.session.in_transaction():
            return await self.cache.invalidate(tag)
        after_commit(self.session, functools.partial(self.cache.invalidate, tag))
        logger.debug("Cache invalidation of %s queued until commit", tag)
        return 0
