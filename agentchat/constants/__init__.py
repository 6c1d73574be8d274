from agentchat.constants.api_routes import API_ENDPOINTS

__all__ = ["API_ENDPOINTS"]
