import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session

from fittrack.api.deps import get_app_settings, get_current_user, get_token_service
from fittrack.config import Settings
from fittrack.crud.user import UserConflictError, create_user, find_conflicting_user, get_user_by_email
from fittrack.database import get_session
from fittrack.models.user import User
from fittrack.schemas.user import UserCreate, UserLogin, UserResponse
from fittrack.services.security import verify_password
from fittrack.services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

DUPLICATE_ACCOUNT = "Email หรือ Username นี้ถูกใช้แล้ว"


def set_session_cookie(response: Response, token: str, token_service: TokenService, settings: Settings) -> None:
    response.set_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        value=token,
        max_age=int(token_service.expires_in.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.TOKEN_COOKIE_NAME)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, session: Session = Depends(get_session)):
    """Create an account"""
    if find_conflicting_user(session, user.email, user.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_ACCOUNT,
        )

    try:
        db_user = create_user(session, user)
    except UserConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_ACCOUNT)
    return {
        "message": "สมัครสมาชิกสำเร็จ",
        "user": UserResponse.model_validate(db_user).model_dump(mode="json", by_alias=True),
    }


@router.post("/login")
async def login(
    credentials: UserLogin,
    response: Response,
    session: Session = Depends(get_session),
    token_service: TokenService = Depends(get_token_service),
    app_settings: Settings = Depends(get_app_settings),
):
    """Check credentials, issue a session token and set it as a cookie"""
    db_user = get_user_by_email(session, credentials.email)
    if not db_user or not verify_password(credentials.password, db_user.hashed_password):
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="อีเมลหรือรหัสผ่านไม่ถูกต้อง",
        )

    token = token_service.issue(db_user.id, db_user.email)
    set_session_cookie(response, token, token_service, app_settings)
    logger.info("User id=%s logged in", db_user.id)
    return {
        "message": "เข้าสู่ระบบสำเร็จ",
        "user": UserResponse.model_validate(db_user).model_dump(mode="json", by_alias=True),
        "token": token,
    }


@router.post("/logout")
async def logout(response: Response, app_settings: Settings = Depends(get_app_settings)):
    clear_session_cookie(response, app_settings)
    return {"message": "ออกจากระบบสำเร็จ"}


@router.get("/me")
async def me(current_user: User = Depends(get_current_user)):
    """Get the logged-in user's profile"""
    return {"user": UserResponse.model_validate(current_user).model_dump(mode="json", by_alias=True)}
