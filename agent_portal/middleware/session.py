"""Session middleware: resolves the session cookie into ``request.state.user``."""


from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from agent_portal.core.session import SessionStore

class SessionMiddleware(BaseHTTPMiddleware):
    """Decodes the session cookie once per request.

    ``request.state.user`` is a :class:`SessionUser` or ``None``. A cookie that
    fails to decode (tampered, expired, old version) is treated as no session
    and cleared on the way out, unless the handler issued a fresh one.
    """

    def __init__(self, app, store: SessionStore):
        super().__init__(app)
        self._store = store

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        token = request.cookies.get(self._store.cookie_name)
        user = self._store.decode(token)
        request.state.user = user
        request.state.session_store = self._store

        response = await call_next(request)

        if token and user is None and not self._store.sets_cookie(response):
            self._store.destroy(response)
        return response
