"""
Assembles the message list sent to the chat model for one user turn.

Resulting order for a fresh conversation:
    [system prompt] [agent behavior rules] [system behavior rules]
    [existing system messages] [memory context] [conversation...] [user]

Both rule messages are inserted directly after the system prompt, so the one
added last (agent rules) ends up first.
"""

from typing import List, Optional, Sequence

from agentchat.core.logging_config import logger
from agentchat.schemas.chat import AgentConfig, ChatMessage, MessageRole
from agentchat.services.system_config import BEHAVIOR_RULES_KEY, SystemConfigRepository
from agentchat.utils.behavior_rules import BehaviorRulesUtil


MEMORY_CONTEXT_HEADER = "Relevant context from previous conversations:"


def _has_system_message(messages: List[ChatMessage], content: str) -> bool:
    return any(m.role == MessageRole.SYSTEM and m.content == content for m in messages)


class MessagePreparationService:
    """Builds the model input from history, agent config, rules and memories"""

    def __init__(self, system_config_repository: SystemConfigRepository):
        self.system_config_repository = system_config_repository

    async def prepare_messages(
        self,
        existing_messages: Sequence[ChatMessage],
        agent_config: AgentConfig,
        user_message: str,
        relevant_memories: Optional[Sequence[str]] = None,
    ) -> List[ChatMessage]:
        """
        Prepare the messages for one model call.

        Handles memory context, the system prompt, system-wide and
        agent-specific behavior rules, and the new user message. The input
        list is not modified.
        """
        messages = list(existing_messages)

        if relevant_memories:
            logger.debug(f"Adding {len(relevant_memories)} memory contexts")
            messages = self._add_memory_context(messages, relevant_memories)

        if agent_config.system_prompt:
            self._add_system_prompt(messages, str(agent_config.system_prompt))

        await self._add_system_behavior_rules(messages, agent_config)

        if agent_config.behavior_rules:
            logger.debug("Adding agent-specific behavior rules")
            self._add_agent_behavior_rules(messages, agent_config)

        messages.append(ChatMessage(role=MessageRole.USER, content=user_message))

        logger.debug(f"Prepared {len(messages)} messages for model call")
        return messages

    @staticmethod
    def _add_memory_context(
        messages: List[ChatMessage],
        relevant_memories: Sequence[str]
    ) -> List[ChatMessage]:
        """Memory context goes after all system messages, before the conversation"""
        memory_context = MEMORY_CONTEXT_HEADER + "\n" + "\n\n".join(
            f"{index}. {memory}" for index, memory in enumerate(relevant_memories, start=1)
        )

        system_messages = [m for m in messages if m.role == MessageRole.SYSTEM]
        other_messages = [m for m in messages if m.role != MessageRole.SYSTEM]

        return [
            *system_messages,
            ChatMessage(role=MessageRole.SYSTEM, content=memory_context),
            *other_messages,
        ]

    @staticmethod
    def _add_system_prompt(messages: List[ChatMessage], system_prompt: str) -> None:
        if not _has_system_message(messages, system_prompt):
            messages.insert(0, ChatMessage(role=MessageRole.SYSTEM, content=system_prompt))

    @staticmethod
    def _insert_after_system_prompt(
        messages: List[ChatMessage],
        agent_config: AgentConfig,
        content: str
    ) -> None:
        """Insert right after the system prompt, or first when there is none"""
        if _has_system_message(messages, content):
            return

        system_prompt = str(agent_config.system_prompt or "")
        index = next(
            (i for i, m in enumerate(messages)
             if m.role == MessageRole.SYSTEM and m.content == system_prompt),
            -1
        )
        messages.insert(index + 1, ChatMessage(role=MessageRole.SYSTEM, content=content))

    async def _add_system_behavior_rules(
        self,
        messages: List[ChatMessage],
        agent_config: AgentConfig
    ) -> None:
        system_rules: List[str] = []
        try:
            system_config = await self.system_config_repository.find_by_key(BEHAVIOR_RULES_KEY)
            if system_config and system_config.config_value:
                system_rules = BehaviorRulesUtil.parse(system_config.config_value)
        except Exception as e:
            # Continue without system rules if loading fails
            logger.log_error_with_context(e, context="loading system behavior rules")

        if not system_rules:
            return

        rules_message = BehaviorRulesUtil.format_system_rules(system_rules)
        if rules_message:
            self._insert_after_system_prompt(messages, agent_config, rules_message)

    def _add_agent_behavior_rules(
        self,
        messages: List[ChatMessage],
        agent_config: AgentConfig
    ) -> None:
        agent_rules = BehaviorRulesUtil.parse(agent_config.behavior_rules)
        if not agent_rules:
            return

        rules_message = BehaviorRulesUtil.format_agent_rules(agent_rules)
        if rules_message:
            self._insert_after_system_prompt(messages, agent_config, rules_message)
