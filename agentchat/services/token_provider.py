"""
Bearer token source for outbound API requests.

The authentication layer registers an async getter at sign-in and clears it at
sign-out. The last token the getter produced (or one set explicitly) is kept
as a fallback for when the getter fails.
"""

from typing import Awaitable, Callable, Optional

from agentchat.core.logging_config import logger


TokenGetter = Callable[[], Awaitable[Optional[str]]]


class TokenProvider:
    """Holds the token getter and the last known token for one client"""

    def __init__(self, token: Optional[str] = None, getter: Optional[TokenGetter] = None):
        self._token: Optional[str] = token
        self._getter: Optional[TokenGetter] = getter

    def set_token_getter(self, getter: TokenGetter) -> None:
        """Register the async callable that produces fresh tokens"""
        self._getter = getter

    def clear_token_getter(self) -> None:
        """Forget the getter and the cached token (sign-out)"""
        self._getter = None
        self._token = None

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def is_ready(self) -> bool:
        """True once a token getter has been registered"""
        return self._getter is not None

    async def get_token(self) -> Optional[str]:
        """
        Current bearer token.

        Asks the registered getter first; if it raises, the cached token is
        returned instead. Only non-empty tokens replace the cached one.
        """
        if self._getter is None:
            return self._token

        try:
            token = await self._getter()
        except Exception as e:
            logger.warning(f"Token getter failed, using cached token: {type(e).__name__}: {e}")
            return self._token

        if token:
            self._token = token
        return token
