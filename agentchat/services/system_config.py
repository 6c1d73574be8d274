"""
Sources of system-wide configuration (behavior rules, system prompt).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from agentchat.constants.api_routes import API_ENDPOINTS
from agentchat.core.exceptions import ApiError
from agentchat.core.logging_config import logger
from agentchat.schemas.chat import SystemConfig
from agentchat.services.api_manager import ApiManager


BEHAVIOR_RULES_KEY = "behavior_rules"
SYSTEM_PROMPT_KEY = "system_prompt"


class SystemConfigRepository(ABC):
    """Looks up system configuration entries by key"""

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[SystemConfig]:
        ...


class InMemorySystemConfigRepository(SystemConfigRepository):
    """Dict-backed repository, for local runs and tests"""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    async def find_by_key(self, key: str) -> Optional[SystemConfig]:
        if key not in self._values:
            return None
        return SystemConfig(config_key=key, config_value=self._values[key])


class ApiSystemConfigRepository(SystemConfigRepository):
    """Reads system configuration from the backend through ApiManager"""

    def __init__(self, api: ApiManager):
        self.api = api

    @staticmethod
    def _endpoint_for(key: str) -> str:
        if key == BEHAVIOR_RULES_KEY:
            return API_ENDPOINTS.SYSTEM_CONFIG.BEHAVIOR_RULES
        if key == SYSTEM_PROMPT_KEY:
            return API_ENDPOINTS.SYSTEM_CONFIG.SYSTEM_PROMPT
        return API_ENDPOINTS.SYSTEM_CONFIG.by_key(key)

    async def find_by_key(self, key: str) -> Optional[SystemConfig]:
        """
        Fetch one entry. A missing entry (404) is None; any other failure
        propagates as ApiError.
        """
        try:
            value = await self.api.get(self._endpoint_for(key))
        except ApiError as e:
            if e.status == 404:
                logger.debug(f"System config '{key}' not found")
                return None
            raise

        return SystemConfig(config_key=key, config_value=value)
