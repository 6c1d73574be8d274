"""
Unit Tests for BehaviorRulesTransformationService
"""
import pytest

from agentchat.schemas.chat import MessageRole
from agentchat.services.behavior_rules_transformation import (
    BehaviorRulesTransformationService,
    RulesFormat,
    RulesTransformOptions,
)


@pytest.fixture
def service():
    return BehaviorRulesTransformationService()


class TestTransformRulesToMessage:
    """Test rendering of a single rule list"""

    def test_empty(self, service):
        assert service.transform_rules_to_message([]) == ""
        assert service.transform_rules_to_message(None) == ""

    def test_all_blank(self, service):
        assert service.transform_rules_to_message(["", "  "]) == ""

    def test_numbered_by_default(self, service):
        assert service.transform_rules_to_message(["a", " b "]) == "1. a\n2. b"

    def test_bulleted(self, service):
        options = RulesTransformOptions(format=RulesFormat.BULLETED)
        assert service.transform_rules_to_message(["a", "b"], options) == "- a\n- b"

    def test_plain(self, service):
        options = RulesTransformOptions(format=RulesFormat.PLAIN)
        assert service.transform_rules_to_message(["a", "", "b"], options) == "a\nb"

    def test_format_given_as_string(self, service):
        options = RulesTransformOptions(format="bulleted")
        assert service.transform_rules_to_message(["a"], options) == "- a"

    def test_unknown_format_is_numbered(self, service):
        options = RulesTransformOptions(format="checklist")
        assert service.transform_rules_to_message(["a", "b"], options) == "1. a\n2. b"

    def test_custom_separator(self, service):
        options = RulesTransformOptions(separator=" | ")
        assert service.transform_rules_to_message(["a", "b"], options) == "1. a | 2. b"

    def test_header(self, service):
        options = RulesTransformOptions(header="Rules:")
        assert service.transform_rules_to_message(["a"], options) == "Rules:\n1. a"


class TestMergeAndTransformRules:
    """Test merging of several rule lists"""

    def test_empty(self, service):
        assert service.merge_and_transform_rules([]) == ""
        assert service.merge_and_transform_rules([[], [""]]) == ""

    def test_merges_in_order(self, service):
        result = service.merge_and_transform_rules([["a", "b"], ["c"]])
        assert result == "1. a\n2. b\n3. c"

    def test_case_insensitive_dedupe(self, service):
        result = service.merge_and_transform_rules([["Be polite", "Use English"], ["be POLITE "]])
        assert result == "1. be POLITE\n2. Use English"

    def test_options_applied(self, service):
        options = RulesTransformOptions(header="Behavior Rules:", format=RulesFormat.PLAIN)
        result = service.merge_and_transform_rules([["x"], ["y"]], options)
        assert result == "Behavior Rules:\nx\ny"


class TestTransformRulesToChatMessage:
    """Test wrapping the rendered rules in a chat message"""

    def test_system_role_by_default(self, service):
        message = service.transform_rules_to_chat_message(["a"])

        assert message.role == MessageRole.SYSTEM
        assert message.content == "1. a"

    def test_custom_role(self, service):
        options = RulesTransformOptions(role=MessageRole.USER)
        message = service.transform_rules_to_chat_message(["a"], options)

        assert message.role == MessageRole.USER

    def test_no_rules_no_message(self, service):
        assert service.transform_rules_to_chat_message([" "]) is None
