"""
Unit Tests for system configuration repositories
"""
import httpx
import pytest

from agentchat.core.exceptions import ApiError
from agentchat.services.system_config import (
    ApiSystemConfigRepository,
    InMemorySystemConfigRepository,
)
from agentchat.utils.behavior_rules import BehaviorRulesUtil


class TestInMemorySystemConfigRepository:
    """Test dict-backed repository"""

    @pytest.mark.asyncio
    async def test_missing_key(self):
        repository = InMemorySystemConfigRepository()

        assert await repository.find_by_key("behavior_rules") is None

    @pytest.mark.asyncio
    async def test_set_and_find(self):
        repository = InMemorySystemConfigRepository({"system_prompt": "Be helpful"})
        repository.set("behavior_rules", ["a"])

        prompt = await repository.find_by_key("system_prompt")
        rules = await repository.find_by_key("behavior_rules")

        assert prompt.config_value == "Be helpful"
        assert rules.config_key == "behavior_rules"
        assert rules.config_value == ["a"]


class TestApiSystemConfigRepository:
    """Test repository backed by the backend API"""

    @pytest.mark.asyncio
    async def test_behavior_rules_endpoint(self, make_api):
        body = {"rules": ["Never share secrets"], "system_prompt": "Be helpful"}
        api, transport = make_api(lambda request: httpx.Response(200, json=body))

        async with api:
            config = await ApiSystemConfigRepository(api).find_by_key("behavior_rules")

        assert transport.last_request.url.path == "/api/system-config/behavior-rules"
        assert config.config_value == body
        assert BehaviorRulesUtil.parse(config.config_value) == ["Never share secrets"]

    @pytest.mark.asyncio
    async def test_other_key_endpoint(self, make_api):
        api, transport = make_api(lambda request: httpx.Response(200, json={"value": 1}))

        async with api:
            await ApiSystemConfigRepository(api).find_by_key("translation_settings")

        assert transport.last_request.url.path == "/api/system-config/translation_settings"

    @pytest.mark.asyncio
    async def test_not_found_is_none(self, make_api):
        api, _ = make_api(lambda request: httpx.Response(404, json={"message": "Not found"}))

        async with api:
            assert await ApiSystemConfigRepository(api).find_by_key("system_prompt") is None

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, make_api):
        api, _ = make_api(lambda request: httpx.Response(403, json={"message": "Forbidden"}))

        async with api:
            with pytest.raises(ApiError) as exc_info:
                await ApiSystemConfigRepository(api).find_by_key("behavior_rules")

        assert exc_info.value.status == 403
