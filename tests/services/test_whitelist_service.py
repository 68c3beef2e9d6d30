import pytest

from wordguard.config.models import GroupPolicy
from wordguard.services.whitelist_service import WhitelistService


@pytest.mark.asyncio
async def test_add_remove_list(redis):
    service = WhitelistService(redis)

    assert await service.add(-100, 7) is True
    assert await service.add(-100, 7) is False
    assert await service.add(-100, 3) is True
    assert await service.list(-100) == [3, 7]
    assert await service.is_whitelisted(-100, 7) is True
    assert await service.is_whitelisted(-200, 7) is False

    assert await service.remove(-100, 7) is True
    assert await service.remove(-100, 7) is False
    assert await service.list(-100) == [3]


@pytest.mark.asyncio
async def test_seed_from_config_runs_once(redis):
    service = WhitelistService(redis)
    groups = [GroupPolicy(group_id=-100, whitelist=[1, 2])]

    await service.seed(groups)
    await service.remove(-100, 2)
    await service.seed(groups)

    assert await service.list(-100) == [1]
