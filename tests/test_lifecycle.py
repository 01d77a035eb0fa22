"""
Tests for the token lifecycle manager.
"""

from unittest.mock import AsyncMock

import pytest

from authgate.modules.auth.interfaces import AuthenticatedUser
from authgate.modules.auth.lifecycle import TokenLifecycleManager
from authgate.modules.errors import InternalError, UnauthorizedError
from authgate.modules.storage.refresh_store import KEY_PREFIX

ACCESS_TTL = 900
REFRESH_TTL = 1209600

ANN = AuthenticatedUser(subject_id="7", display_name="Ann", roles=["USER"])


async def _refresh_keys(fake_redis):
    return [k async for k in fake_redis.scan_iter(match=f"{KEY_PREFIX}*")]


@pytest.mark.asyncio
async def test_issue_stores_only_the_hash(lifecycle, hasher, fake_redis, signer):
    pair = await lifecycle.issue(ANN)

    keys = await _refresh_keys(fake_redis)
    assert keys == [f"{KEY_PREFIX}{hasher.hash(pair.refresh_token)}"]
    assert pair.refresh_token not in keys[0]
    assert await fake_redis.get(keys[0]) == "7"

    claims = signer.verify(pair.access_token)
    assert claims.subject == "7"
    assert pair.access_expires_in == ACCESS_TTL
    assert pair.refresh_expires_in == REFRESH_TTL
    assert pair.token_type == "Bearer"


@pytest.mark.asyncio
async def test_issue_fails_when_store_does_not_acknowledge(signer, hasher, identity):
    store = AsyncMock()
    store.save = AsyncMock(return_value=False)
    manager = TokenLifecycleManager(signer, hasher, store, identity, REFRESH_TTL)

    with pytest.raises(InternalError):
        await manager.issue(ANN)


@pytest.mark.asyncio
async def test_rotate_returns_new_pair_and_invalidates_old(lifecycle, signer):
    first = await lifecycle.issue(ANN)

    second = await lifecycle.rotate(first.refresh_token)

    assert second.refresh_token != first.refresh_token
    assert signer.verify(second.access_token).display_name == "Ann"
    with pytest.raises(UnauthorizedError):
        await lifecycle.rotate(first.refresh_token)
    third = await lifecycle.rotate(second.refresh_token)
    assert third.refresh_token not in (first.refresh_token, second.refresh_token)


@pytest.mark.asyncio
async def test_rotate_unknown_token_is_unauthorized_and_stores_nothing(lifecycle, fake_redis):
    with pytest.raises(UnauthorizedError):
        await lifecycle.rotate("never-issued")

    assert await _refresh_keys(fake_redis) == []


@pytest.mark.asyncio
async def test_rotate_reloads_subject_profile(lifecycle, user_directory, signer):
    pair = await lifecycle.issue(ANN)
    user_directory.add("7", "Ann B.", ["USER", "ADMIN"])

    rotated = await lifecycle.rotate(pair.refresh_token)

    claims = signer.verify(rotated.access_token)
    assert claims.display_name == "Ann B."
    assert claims.roles == ["USER", "ADMIN"]


@pytest.mark.asyncio
async def test_rotate_for_deleted_user_is_unauthorized(lifecycle, user_directory):
    pair = await lifecycle.issue(ANN)
    del user_directory.users["7"]

    with pytest.raises(UnauthorizedError) as exc_info:
        await lifecycle.rotate(pair.refresh_token)
    assert exc_info.value.details == {"reason": "USER_NOT_FOUND"}


@pytest.mark.asyncio
async def test_revoke_is_idempotent(lifecycle, fake_redis):
    pair = await lifecycle.issue(ANN)

    await lifecycle.revoke(pair.refresh_token)
    await lifecycle.revoke(pair.refresh_token)

    assert await _refresh_keys(fake_redis) == []
    with pytest.raises(UnauthorizedError):
        await lifecycle.rotate(pair.refresh_token)
