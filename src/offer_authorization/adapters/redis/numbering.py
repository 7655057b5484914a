"""Redis-backed number publishers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...primitives.exceptions import ServiceUnavailableError
from ...primitives.numbers import compose_number, timestamp_key

if TYPE_CHECKING:
    from datetime import datetime

    from redis.asyncio import Redis

logger = logging.getLogger("offer_authorization.redis_numbering")

KEY_TTL_SECONDS = 60


class RedisNumberPublisher:
    """
    Issue numbers from a per-project, per-second Redis counter.

    ``INCR`` and ``EXPIRE`` run in one ``MULTI`` block so every counter key
    disappears shortly after its second has passed.
    """

    def __init__(
        self,
        redis_client: Redis[bytes],
        *,
        key_prefix: str,
        check_digit: bool = False,
    ) -> None:
        self._redis = redis_client
        self._key_prefix = key_prefix
        self._check_digit = check_digit

    async def publish(self, project_id: str, now: datetime) -> str:
        key = f"{self._key_prefix}:{project_id}:{timestamp_key(now)}"
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, KEY_TTL_SECONDS)
                results = await pipe.execute()
        except Exception as e:
            logger.exception("Redis number publication failed for key %s", key)
            raise ServiceUnavailableError(f"Could not publish number: {e}") from e
        return compose_number(now, int(results[0]), check_digit=self._check_digit)


class RedisTransactionNumberPublisher(RedisNumberPublisher):
    def __init__(self, redis_client: Redis[bytes]) -> None:
        super().__init__(
            redis_client, key_prefix="offer_authorization:transactionNumber"
        )


class RedisAccountNumberPublisher(RedisNumberPublisher):
    """Payment-card account numbers with a Luhn check digit."""

    def __init__(self, redis_client: Redis[bytes]) -> None:
        super().__init__(
            redis_client,
            key_prefix="offer_authorization:accountNumber",
            check_digit=True,
        )
