import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import urlencode

from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from fittrack.services.token_service import InvalidTokenError, TokenService, extract_token

logger = logging.getLogger(__name__)


class RouteClass(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    AUTH_ONLY = "auth_only"


@dataclass(frozen=True)
class GateDecision:
    location: Optional[str] = None
    clear_cookie: bool = False

    @property
    def proceed(self) -> bool:
        return self.location is None


PROCEED = GateDecision()


def _matches(path: str, route: str) -> bool:
    return path == route or path.startswith(route.rstrip("/") + "/")


class AccessGate:
    """Redirect policy for page routes, evaluated per request with no shared state.

    Registered with ``app.middleware("http")``; API and static paths pass
    straight through.
    """

    def __init__(
        self,
        token_service: TokenService,
        protected_routes: Iterable[str],
        auth_routes: Iterable[str],
        exempt_prefixes: Iterable[str] = ("/api",),
        login_path: str = "/login",
        home_path: str = "/dashboard",
        cookie_name: str = "token",
    ) -> None:
        self.token_service = token_service
        self.protected_routes = tuple(protected_routes)
        self.auth_routes = tuple(auth_routes)
        self.exempt_prefixes = tuple(exempt_prefixes)
        self.login_path = login_path
        self.home_path = home_path
        self.cookie_name = cookie_name

    def is_exempt(self, path: str) -> bool:
        return any(_matches(path, prefix) for prefix in self.exempt_prefixes)

    def classify(self, path: str) -> RouteClass:
        if any(_matches(path, route) for route in self.protected_routes):
            return RouteClass.PROTECTED
        if any(_matches(path, route) for route in self.auth_routes):
            return RouteClass.AUTH_ONLY
        return RouteClass.PUBLIC

    def _token_is_valid(self, token: str) -> bool:
        try:
            self.token_service.verify(token)
        except InvalidTokenError:
            return False
        return True

    def decide(self, path: str, token: Optional[str]) -> GateDecision:
        route_class = self.classify(path)

        if not token:
            if route_class == RouteClass.PROTECTED:
                return GateDecision(location=f"{self.login_path}?{urlencode({'from': path})}")
            return PROCEED

        if self._token_is_valid(token):
            if route_class == RouteClass.AUTH_ONLY:
                return GateDecision(location=self.home_path)
            return PROCEED

        # Stale or forged token: force a fresh login on protected pages only
        if route_class == RouteClass.PROTECTED:
            return GateDecision(location=self.login_path, clear_cookie=True)
        return PROCEED

    async def __call__(self, request: Request, call_next) -> Response:
        path = request.url.path
        if self.is_exempt(path):
            return await call_next(request)

        decision = self.decide(path, extract_token(request, self.cookie_name))
        if decision.proceed:
            return await call_next(request)

        logger.debug("Access gate redirecting %s to %s", path, decision.location)
        response = RedirectResponse(decision.location)
        if decision.clear_cookie:
            response.delete_cookie(self.cookie_name)
        return response
