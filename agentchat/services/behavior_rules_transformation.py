"""
Behavior rules rendering beyond the fixed numbered format.

Renders rule lists as numbered, bulleted or plain text and merges several
lists with case-insensitive dedupe.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from agentchat.core.logging_config import logger
from agentchat.schemas.chat import ChatMessage, MessageRole


class RulesFormat(str, Enum):
    NUMBERED = "numbered"
    BULLETED = "bulleted"
    PLAIN = "plain"


@dataclass
class RulesTransformOptions:
    """How a list of rules is rendered into one message"""
    role: Optional[MessageRole] = None
    header: Optional[str] = None
    format: RulesFormat = RulesFormat.NUMBERED
    separator: str = "\n"


def _rules_format(value) -> RulesFormat:
    """Unknown formats render as a numbered list"""
    try:
        return RulesFormat(value)
    except ValueError:
        logger.debug(f"Unknown rules format {value!r}, using numbered")
        return RulesFormat.NUMBERED


def _valid_rules(rules: Iterable[Optional[str]]) -> List[str]:
    return [rule.strip() for rule in rules if rule and rule.strip()]


class BehaviorRulesTransformationService:
    """Render behavior rule lists as message content"""

    def transform_rules_to_message(
        self,
        rules: Optional[Sequence[str]],
        options: Optional[RulesTransformOptions] = None
    ) -> str:
        """
        Transform a list of behavior rules into a single message content.

        Blank rules are dropped and the rest stripped. Returns "" when no rule
        survives.
        """
        if not rules:
            logger.debug("No rules to transform")
            return ""

        options = options or RulesTransformOptions()
        valid_rules = _valid_rules(rules)
        if not valid_rules:
            return ""

        rules_format = _rules_format(options.format)
        if rules_format == RulesFormat.BULLETED:
            lines = [f"- {rule}" for rule in valid_rules]
        elif rules_format == RulesFormat.PLAIN:
            lines = valid_rules
        else:
            lines = [f"{index}. {rule}" for index, rule in enumerate(valid_rules, start=1)]

        formatted_rules = options.separator.join(lines)

        if options.header:
            return f"{options.header}\n{formatted_rules}"

        logger.log_rules_event("transform", rules_format.value, rule_count=len(valid_rules))
        return formatted_rules

    def merge_and_transform_rules(
        self,
        rule_lists: Optional[Sequence[Sequence[str]]],
        options: Optional[RulesTransformOptions] = None
    ) -> str:
        """
        Merge several rule lists into one message.

        Duplicates are detected case-insensitively; a duplicate keeps the
        position of its first occurrence and the spelling of its last.
        """
        if not rule_lists:
            logger.debug("No rule lists to merge")
            return ""

        all_rules = _valid_rules(rule for rules in rule_lists for rule in (rules or []))
        if not all_rules:
            return ""

        unique_rules = {}
        for rule in all_rules:
            unique_rules[rule.lower()] = rule

        logger.log_rules_event(
            "merge",
            f"{len(rule_lists)} lists",
            rule_count=len(unique_rules)
        )

        return self.transform_rules_to_message(list(unique_rules.values()), options)

    def transform_rules_to_chat_message(
        self,
        rules: Optional[Sequence[str]],
        options: Optional[RulesTransformOptions] = None
    ) -> Optional[ChatMessage]:
        """Rules as a ready-to-send message, authored by `options.role` (system by default)"""
        options = options or RulesTransformOptions()
        content = self.transform_rules_to_message(rules, options)
        if not content:
            return None
        return ChatMessage(role=options.role or MessageRole.SYSTEM, content=content)
