"""
Custom Exceptions for AgentChat
===============================

Usage:
    from agentchat.core.exceptions import ApiError

    try:
        agents = await api.get(API_ENDPOINTS.AGENTS.BASE)
    except ApiError as e:
        logger.error(f"Loading agents failed: {e.message} (status {e.status})")
        raise
"""

from typing import Optional, Any, Dict


class AgentChatError(Exception):
    """Base exception for all AgentChat errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# HTTP / API Errors
# ============================================

class ApiError(AgentChatError):
    """
    Normalized failure of an outbound API request.

    Raised for non-2xx responses (with status and the decoded body as data)
    and for transport failures (message only).
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        data: Any = None,
        expected: bool = False
    ):
        super().__init__(message, code="API_ERROR" if status is None else f"HTTP_{status}")
        self.status = status
        self.data = data
        self.expected = expected

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "message": self.message,
            "status": self.status,
            "data": self.data,
        }
        if self.expected:
            result["expected"] = True
        return result

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status!r})"


# ============================================
# Configuration Errors
# ============================================

class ConfigurationError(AgentChatError):
    """Invalid client configuration"""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting} if setting else {}
        )
