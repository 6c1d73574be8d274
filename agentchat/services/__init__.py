from agentchat.services.token_provider import TokenProvider
from agentchat.services.api_manager import ApiManager
from agentchat.services.behavior_rules_transformation import (
    BehaviorRulesTransformationService,
    RulesFormat,
    RulesTransformOptions,
)
from agentchat.services.system_config import (
    SystemConfigRepository,
    InMemorySystemConfigRepository,
    ApiSystemConfigRepository,
)
from agentchat.services.message_preparation import MessagePreparationService

__all__ = [
    # HTTP
    "TokenProvider",
    "ApiManager",
    # Behavior rules
    "BehaviorRulesTransformationService",
    "RulesFormat",
    "RulesTransformOptions",
    # System configuration
    "SystemConfigRepository",
    "InMemorySystemConfigRepository",
    "ApiSystemConfigRepository",
    # Chat
    "MessagePreparationService",
]
