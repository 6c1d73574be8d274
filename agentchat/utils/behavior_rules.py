"""
Behavior rules parsing and formatting.

Agent and system behavior rules reach the client in whatever shape they were
stored in: a JSON-encoded string, a plain string, a list, or an object with a
"rules" list. Everything is normalized to a list of strings here, and rendered
back as a numbered system message for the model.
"""

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from agentchat.core.logging_config import logger


SYSTEM_RULES_HEADER = "System Behavior Rules (Required):"
AGENT_RULES_HEADER = "Behavior Rules:"


class RulesInputKind(str, Enum):
    """Shape of a stored behavior rules value"""
    EMPTY = "empty"
    JSON_STRING = "json_string"
    RAW_STRING = "raw_string"
    STRING_ARRAY = "string_array"
    RULES_OBJECT = "rules_object"
    SCALAR = "scalar"


@dataclass(frozen=True)
class RulesInput:
    """
    A stored rules value tagged with its shape.

    For JSON_STRING, `value` is the raw text and `payload` holds the
    classification of the decoded document.
    """
    kind: RulesInputKind
    value: Any = None
    payload: Optional["RulesInput"] = None


def to_rule_text(value: Any) -> str:
    """
    Stringify one rule element.

    Decoded JSON scalars render the way they were written (true, null, 1),
    not with Python's repr conventions.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_rule_text(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def _classify_decoded(value: Any) -> RulesInput:
    if isinstance(value, (list, tuple)):
        return RulesInput(RulesInputKind.STRING_ARRAY, list(value))
    if isinstance(value, Mapping):
        rules = value.get("rules")
        if isinstance(rules, (list, tuple)):
            return RulesInput(RulesInputKind.RULES_OBJECT, list(rules))
    return RulesInput(RulesInputKind.SCALAR, value)


def classify_rules_input(value: Any) -> RulesInput:
    """Determine the shape of a stored rules value once, at the boundary"""
    if not value:
        return RulesInput(RulesInputKind.EMPTY)

    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except (json.JSONDecodeError, ValueError):
            return RulesInput(RulesInputKind.RAW_STRING, value)
        return RulesInput(RulesInputKind.JSON_STRING, value, _classify_decoded(decoded))

    return _classify_decoded(value)


def rules_from_input(rules_input: RulesInput) -> List[str]:
    """Turn a classified rules value into its canonical list of strings"""
    kind = rules_input.kind

    if kind == RulesInputKind.EMPTY:
        return []
    if kind == RulesInputKind.JSON_STRING:
        return rules_from_input(rules_input.payload)
    if kind == RulesInputKind.RAW_STRING:
        return [rules_input.value]
    if kind in (RulesInputKind.STRING_ARRAY, RulesInputKind.RULES_OBJECT):
        return [to_rule_text(rule) for rule in rules_input.value]
    if kind == RulesInputKind.SCALAR:
        return [to_rule_text(rules_input.value)]

    raise ValueError(f"Unknown rules input kind: {kind}")


class BehaviorRulesUtil:
    """Parse stored behavior rules and render them as system messages"""

    @staticmethod
    def parse(value: Any) -> List[str]:
        """
        Normalize a stored behavior rules value into a list of strings.

        Accepts a JSON string, a plain string, a list, or a mapping with a
        "rules" list. Never raises: anything that cannot be processed is
        logged and yields an empty list.
        """
        try:
            rules_input = classify_rules_input(value)
            rules = rules_from_input(rules_input)
            logger.log_rules_event("parse", rules_input.kind.value, rule_count=len(rules))
            return rules
        except Exception as e:
            logger.log_error_with_context(e, context="parsing behavior rules")
            return []

    @staticmethod
    def format(rules: Optional[Iterable[Any]]) -> str:
        """Number the non-blank rules from 1, one per line"""
        if not rules:
            return ""

        valid_rules = [
            str(rule).strip() for rule in rules
            if rule is not None and str(rule).strip()
        ]
        return "\n".join(
            f"{index}. {rule}" for index, rule in enumerate(valid_rules, start=1)
        )

    @staticmethod
    def _with_header(header: str, rules: Optional[Iterable[Any]]) -> str:
        formatted = BehaviorRulesUtil.format(rules)
        if not formatted:
            return ""
        return f"{header}\n{formatted}"

    @staticmethod
    def format_system_rules(rules: Optional[Iterable[Any]]) -> str:
        """System-wide rules message, or "" when there are no rules"""
        return BehaviorRulesUtil._with_header(SYSTEM_RULES_HEADER, rules)

    @staticmethod
    def format_agent_rules(rules: Optional[Iterable[Any]]) -> str:
        """Agent-specific rules message, or "" when there are no rules"""
        return BehaviorRulesUtil._with_header(AGENT_RULES_HEADER, rules)

    # Agents were called bots in older stored configs
    format_bot_rules = format_agent_rules
