import logging
import uuid
from datetime import timedelta

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pantrychef.database import Session as DBSession, User
from pantrychef.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, UserResponse
from pantrychef.token_utils import (
    create_access_token,
    create_refresh_token,
    decode_token,
    REFRESH_TOKEN_EXPIRE_DAYS,
)
from pantrychef.utils_time import format_datetime, utc_now

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


class AuthService:
    """Service for registration, login, logout and token handling."""

    def __init__(self, db: Session):
        self.db = db

    def register_user(self, request: RegisterRequest) -> UserResponse:
        existing_user = self.db.query(User).filter(User.username == request.username).first()
        if existing_user:
            raise ValueError("User already exists")

        db_user = User(
            user_id=str(uuid.uuid4()),
            username=request.username,
            password_hash=hash_password(request.password),
            created_at=utc_now()
        )
        self.db.add(db_user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValueError("User already exists")
        self.db.refresh(db_user)
        logger.info("register_user: user_id=%s username=%s", db_user.user_id, db_user.username)
        return self._to_response(db_user)

    def login_user(self, request: LoginRequest, request_ctx=None) -> dict:
        """Check credentials, open a session and return access/refresh tokens bound to it."""
        db_user = self.db.query(User).filter(User.username == request.username).first()
        if not db_user or not verify_password(request.password, db_user.password_hash):
            raise PermissionError("Invalid username or password")

        ip_address = None
        user_agent = None
        if request_ctx is not None:
            user_agent = request_ctx.headers.get("user-agent")
            ip_address = request_ctx.headers.get("x-forwarded-for")
            if not ip_address and getattr(request_ctx, "client", None):
                ip_address = request_ctx.client.host

        now = utc_now()
        session_id = str(uuid.uuid4())
        self.db.add(DBSession(
            session_id=session_id,
            user_id=db_user.user_id,
            created_at=now,
            expires_at=now + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS),
            is_active=True,
            ip_address=ip_address,
            user_agent=user_agent,
        ))
        db_user.last_login_at = now
        self.db.commit()

        payload = {"user_id": db_user.user_id, "username": db_user.username, "session_id": session_id}
        access_token_data = create_access_token(payload)
        refresh_token_data = create_refresh_token(payload)
        logger.info("login_user: user_id=%s session_id=%s", db_user.user_id, session_id)

        return {
            "user_id": db_user.user_id,
            "username": db_user.username,
            "access_token": access_token_data["token"],
            "access_token_expires_at": access_token_data["expires_at"],
            "refresh_token": refresh_token_data["token"],
            "refresh_token_expires_at": refresh_token_data["expires_at"]
        }

    def refresh_token(self, request: RefreshRequest) -> dict:
        payload = decode_token(request.refresh_token, expected_type="refresh")
        self._require_active_session(payload)
        new_access_token_data = create_access_token({
            "user_id": payload["user_id"],
            "username": payload["username"],
            "session_id": payload["session_id"],
        })
        return {
            "access_token": new_access_token_data["token"],
            "access_token_expires_at": new_access_token_data["expires_at"]
        }

    def validate_token(self, token: str) -> dict:
        """Decode an access token and check that its session has not been logged out."""
        payload = decode_token(token)
        self._require_active_session(payload)
        return payload

    def logout(self, session_id: str) -> None:
        updated = self.db.query(DBSession).filter(
            DBSession.session_id == session_id,
            DBSession.is_active.is_(True)
        ).update({DBSession.is_active: False}, synchronize_session=False)
        self.db.commit()
        if not updated:
            raise ValueError("Session already ended")
        logger.info("logout: session_id=%s", session_id)

    def get_user(self, user_id: str) -> UserResponse:
        db_user = self.db.query(User).filter(User.user_id == user_id).first()
        if not db_user:
            raise ValueError("User not found")
        return self._to_response(db_user)

    def _require_active_session(self, payload: dict) -> None:
        session_id = payload.get("session_id")
        if not session_id:
            raise ValueError("Invalid token")
        active = self.db.query(DBSession.session_id).filter(
            DBSession.session_id == session_id,
            DBSession.is_active.is_(True)
        ).first()
        if active is None:
            raise ValueError("Session has ended. Please log in again.")

    @staticmethod
    def _to_response(db_user) -> UserResponse:
        return UserResponse(
            user_id=db_user.user_id,
            username=db_user.username,
            created_at=format_datetime(db_user.created_at)
        )
