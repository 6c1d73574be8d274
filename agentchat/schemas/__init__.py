from agentchat.schemas.chat import (
    MessageRole,
    ChatMessage,
    AgentConfig,
    SystemConfig,
)

__all__ = [
    "MessageRole",
    "ChatMessage",
    "AgentConfig",
    "SystemConfig",
]
