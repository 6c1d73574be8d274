"""
Backend REST endpoint paths used by the client.

Paths are relative to the API base URL; pass query values through the
`params` argument of ApiManager rather than formatting them into the path.
"""

from typing import Optional


class ChatRoutes:
    BASE = "/api/chat"

    @staticmethod
    def by_agent(agent_id: int) -> str:
        return f"/api/chat/{agent_id}"

    @staticmethod
    def sessions(agent_id: int) -> str:
        return f"/api/chat/{agent_id}/sessions"

    @staticmethod
    def session(agent_id: int, session_id: int) -> str:
        return f"/api/chat/{agent_id}/sessions/{session_id}"

    @staticmethod
    def by_agent_params(session_id: Optional[int] = None) -> dict:
        """Query params for loading a chat, optionally pinned to one session"""
        return {"sessionId": session_id} if session_id else {}


class SessionRoutes:
    BASE = "/api/sessions"

    @staticmethod
    def by_id(session_id: int) -> str:
        return f"/api/sessions/{session_id}"


class AgentRoutes:
    BASE = "/api/agents"

    @staticmethod
    def by_id(agent_id: int) -> str:
        return f"/api/agents/{agent_id}"

    @staticmethod
    def memories(agent_id: int) -> str:
        return f"/api/agents/{agent_id}/memories"

    @staticmethod
    def memory(agent_id: int, memory_id: int) -> str:
        return f"/api/agents/{agent_id}/memories/{memory_id}"

    @staticmethod
    def memories_summarize(agent_id: int) -> str:
        return f"/api/agents/{agent_id}/memories/summarize"


class MessageRoutes:
    TRANSLATIONS = "/api/messages/translations"

    @staticmethod
    def translate(message_id: int) -> str:
        return f"/api/messages/{message_id}/translate"

    @staticmethod
    def translate_with_words(message_id: int) -> str:
        return f"/api/messages/{message_id}/translate-with-words"

    @staticmethod
    def word_translations(message_id: int) -> str:
        return f"/api/messages/{message_id}/word-translations"

    @staticmethod
    def translate_words(message_id: int) -> str:
        return f"/api/messages/{message_id}/words/translate"

    @staticmethod
    def translations_params(message_ids: list) -> dict:
        return {"messageIds": ",".join(str(message_id) for message_id in message_ids)}


class UserRoutes:
    ME = "/api/user/me"
    ALL = "/api/user/all"


class ApiCredentialRoutes:
    OPENAI = "/api/api-credentials/openai"
    OPENAI_CHECK = "/api/api-credentials/openai/check"


class SystemConfigRoutes:
    BASE = "/api/system-config"
    BEHAVIOR_RULES = "/api/system-config/behavior-rules"
    SYSTEM_PROMPT = "/api/system-config/system-prompt"

    @staticmethod
    def behavior_rules_for(agent_type: Optional[str] = None) -> str:
        """Rules for one agent type; None selects the main agent"""
        return f"/api/system-config/behavior-rules/{agent_type or 'main'}"

    @staticmethod
    def by_key(key: str) -> str:
        return f"/api/system-config/{key}"


class SavedWordRoutes:
    BASE = "/api/saved-words"
    MATCHING = "/api/saved-words/matching"

    @staticmethod
    def by_id(word_id: int) -> str:
        return f"/api/saved-words/{word_id}"

    @staticmethod
    def sentences(word_id: int) -> str:
        return f"/api/saved-words/{word_id}/sentences"

    @staticmethod
    def sentence(word_id: int, sentence_id: int) -> str:
        return f"/api/saved-words/{word_id}/sentences/{sentence_id}"


class AgentArchetypeRoutes:
    BASE = "/api/agent-archetypes"

    @staticmethod
    def by_id(archetype_id: int) -> str:
        return f"/api/agent-archetypes/{archetype_id}"


class API_ENDPOINTS:
    """Grouped endpoint catalog, e.g. API_ENDPOINTS.AGENTS.by_id(3)"""
    CHAT = ChatRoutes
    SESSIONS = SessionRoutes
    AGENTS = AgentRoutes
    MESSAGES = MessageRoutes
    USER = UserRoutes
    API_CREDENTIALS = ApiCredentialRoutes
    SYSTEM_CONFIG = SystemConfigRoutes
    SAVED_WORDS = SavedWordRoutes
    AGENT_ARCHETYPES = AgentArchetypeRoutes
    HEALTHCHECK = "/api/healthcheck"
