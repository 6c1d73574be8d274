"""
Pydantic schemas for chat message preparation and system configuration
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Chat message author"""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One message in the conversation sent to the model"""
    role: MessageRole = Field(..., description="Message author")
    content: str = Field(..., description="Message text")


class AgentConfig(BaseModel):
    """The parts of an agent's configuration that shape its prompt"""
    system_prompt: Optional[str] = Field(None, description="Agent system prompt")
    behavior_rules: Any = Field(None, description="Stored behavior rules in any accepted shape")


class SystemConfig(BaseModel):
    """A system-wide configuration entry"""
    config_key: str = Field(..., description="Configuration key")
    config_value: Any = Field(None, description="Stored value")
