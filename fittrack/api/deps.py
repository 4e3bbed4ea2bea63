from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from fittrack.config import Settings
from fittrack.crud.user import get_user
from fittrack.database import get_session
from fittrack.errors import INVALID_TOKEN, MISSING_TOKEN, USER_NOT_FOUND
from fittrack.models.user import User
from fittrack.services.token_service import InvalidTokenError, TokenPayload, TokenService, extract_token


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_token_payload(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> TokenPayload:
    """Resolve the caller's identity from the bearer header or session cookie."""
    token = extract_token(request, get_app_settings(request).TOKEN_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=MISSING_TOKEN)
    try:
        return token_service.verify(token)
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)


def get_current_user_id(payload: TokenPayload = Depends(get_token_payload)) -> int:
    return payload.user_id


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    session: Session = Depends(get_session),
) -> User:
    user = get_user(session, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)
    return user
