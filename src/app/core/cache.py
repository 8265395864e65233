"""Revoked access tokens, kept in Redis until they would have expired anyway.

Logout stores the hash of the token's ``jti``. Without Redis, revocation is not
persisted and tokens stay valid until they expire.
"""

from src.app.core.redis import get_redis

PREFIX_TOKEN_BLACKLIST = "token_blacklist"


def _key(token_hash: str) -> str:
    return f"{PREFIX_TOKEN_BLACKLIST}:{token_hash}"


async def blacklist_token(token_hash: str, ttl: int) -> bool:
    """Revoke a token for ``ttl`` seconds.

    Returns:
        False when nothing was stored: the token has already expired or
        Redis is unavailable.
    """
    if ttl <= 0:
        return False
    client = await get_redis()
    if client is None:
        return False
    await client.set(_key(token_hash), "1", ex=ttl)
    return True


async def is_token_blacklisted(token_hash: str) -> bool | None:
    """True if revoked, False if Redis says it is not, None if Redis is unavailable."""
    client = await get_redis()
    if client is None:
        return None
    return await client.exists(_key(token_hash)) > 0
