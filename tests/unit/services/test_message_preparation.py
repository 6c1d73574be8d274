"""
Unit Tests for MessagePreparationService
Tests for: memory context, system prompt, system and agent behavior rules ordering
"""
import pytest
from unittest.mock import AsyncMock

from agentchat.schemas.chat import AgentConfig, ChatMessage, MessageRole, SystemConfig
from agentchat.services.message_preparation import MessagePreparationService
from agentchat.services.system_config import InMemorySystemConfigRepository


SYSTEM_PROMPT = "You are a helpful assistant"


def system(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.SYSTEM, content=content)


def user(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.USER, content=content)


def assistant(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.ASSISTANT, content=content)


@pytest.fixture
def repository():
    return InMemorySystemConfigRepository()


@pytest.fixture
def service(repository):
    return MessagePreparationService(repository)


class TestPrepareMessages:
    """Test the assembled message list"""

    @pytest.mark.asyncio
    async def test_minimal(self, service):
        result = await service.prepare_messages([], AgentConfig(), "Hello", [])

        assert result == [user("Hello")]

    @pytest.mark.asyncio
    async def test_system_prompt_prepended(self, service):
        history = [user("Hi"), assistant("Hello!")]

        result = await service.prepare_messages(history, AgentConfig(system_prompt=SYSTEM_PROMPT), "How are you?")

        assert result == [system(SYSTEM_PROMPT), user("Hi"), assistant("Hello!"), user("How are you?")]

    @pytest.mark.asyncio
    async def test_system_prompt_not_duplicated(self, service):
        history = [system(SYSTEM_PROMPT), user("Hi")]

        result = await service.prepare_messages(history, AgentConfig(system_prompt=SYSTEM_PROMPT), "Again")

        assert [m.content for m in result].count(SYSTEM_PROMPT) == 1

    @pytest.mark.asyncio
    async def test_input_not_mutated(self, service):
        history = [user("Hi")]

        await service.prepare_messages(history, AgentConfig(system_prompt=SYSTEM_PROMPT), "Next", ["fact"])

        assert history == [user("Hi")]

    @pytest.mark.asyncio
    async def test_agent_rules_after_system_prompt(self, service):
        config = AgentConfig(system_prompt=SYSTEM_PROMPT, behavior_rules='["Be polite", "Be brief"]')

        result = await service.prepare_messages([user("Hi")], config, "Next")

        assert result == [
            system(SYSTEM_PROMPT),
            system("Behavior Rules:\n1. Be polite\n2. Be brief"),
            user("Hi"),
            user("Next"),
        ]

    @pytest.mark.asyncio
    async def test_system_rules_and_agent_rules_ordering(self, service, repository):
        repository.set("behavior_rules", {"rules": ["Never share secrets"]})
        config = AgentConfig(system_prompt=SYSTEM_PROMPT, behavior_rules=["Be polite"])

        result = await service.prepare_messages([], config, "Hello")

        assert result == [
            system(SYSTEM_PROMPT),
            system("Behavior Rules:\n1. Be polite"),
            system("System Behavior Rules (Required):\n1. Never share secrets"),
            user("Hello"),
        ]

    @pytest.mark.asyncio
    async def test_rules_without_system_prompt_go_first(self, service, repository):
        repository.set("behavior_rules", '["Stay on topic"]')
        config = AgentConfig(behavior_rules="Answer in Spanish")

        result = await service.prepare_messages([user("Hola")], config, "Que tal?")

        assert result == [
            system("Behavior Rules:\n1. Answer in Spanish"),
            system("System Behavior Rules (Required):\n1. Stay on topic"),
            user("Hola"),
            user("Que tal?"),
        ]

    @pytest.mark.asyncio
    async def test_rules_message_not_duplicated(self, service):
        rules_message = "Behavior Rules:\n1. Be polite"
        history = [system(SYSTEM_PROMPT), system(rules_message), user("Hi")]
        config = AgentConfig(system_prompt=SYSTEM_PROMPT, behavior_rules=["Be polite"])

        result = await service.prepare_messages(history, config, "Next")

        assert [m.content for m in result].count(rules_message) == 1

    @pytest.mark.asyncio
    async def test_memory_context_after_system_messages(self, service):
        history = [system("Earlier summary"), user("Hi"), assistant("Hello")]

        result = await service.prepare_messages(history, AgentConfig(), "Remember me?", ["Likes tea", "Lives in Oslo"])

        assert result == [
            system("Earlier summary"),
            system("Relevant context from previous conversations:\n1. Likes tea\n\n2. Lives in Oslo"),
            user("Hi"),
            assistant("Hello"),
            user("Remember me?"),
        ]

    @pytest.mark.asyncio
    async def test_full_ordering(self, service, repository):
        repository.set("behavior_rules", ["Be safe"])
        config = AgentConfig(system_prompt=SYSTEM_PROMPT, behavior_rules=["Be kind"])

        result = await service.prepare_messages([user("Hi")], config, "Next", ["Likes tea"])

        assert [m.content for m in result] == [
            SYSTEM_PROMPT,
            "Behavior Rules:\n1. Be kind",
            "System Behavior Rules (Required):\n1. Be safe",
            "Relevant context from previous conversations:\n1. Likes tea",
            "Hi",
            "Next",
        ]

    @pytest.mark.asyncio
    async def test_blank_rules_add_nothing(self, service, repository):
        repository.set("behavior_rules", ["", "  "])
        config = AgentConfig(behavior_rules=["   "])

        result = await service.prepare_messages([], config, "Hello")

        assert result == [user("Hello")]


class TestSystemRulesLoading:
    """Test tolerance of system config failures"""

    @pytest.mark.asyncio
    async def test_repository_failure_is_ignored(self):
        repository = AsyncMock()
        repository.find_by_key.side_effect = RuntimeError("database unavailable")
        service = MessagePreparationService(repository)

        result = await service.prepare_messages([], AgentConfig(behavior_rules=["Be kind"]), "Hello")

        assert result == [system("Behavior Rules:\n1. Be kind"), user("Hello")]

    @pytest.mark.asyncio
    async def test_looks_up_behavior_rules_key(self):
        repository = AsyncMock()
        repository.find_by_key.return_value = SystemConfig(config_key="behavior_rules", config_value=None)
        service = MessagePreparationService(repository)

        await service.prepare_messages([], AgentConfig(), "Hello")

        repository.find_by_key.assert_awaited_once_with("behavior_rules")
