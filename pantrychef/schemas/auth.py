from pydantic import BaseModel, constr, field_validator

UsernameStr = constr(strip_whitespace=True, min_length=3, max_length=50, pattern=r'^[A-Za-z0-9_.-]+$')


class RegisterRequest(BaseModel):
    """Schema for user registration."""
    username: UsernameStr
    password: constr(min_length=8, max_length=72)

    @field_validator('password')
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        # bcrypt ignores anything past 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError('Password must be at most 72 bytes')
        return v


class LoginRequest(BaseModel):
    """Schema for login request."""
    username: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=1)


class RefreshRequest(BaseModel):
    """Schema for refresh token request."""
    refresh_token: str


class UserResponse(BaseModel):
    user_id: str
    username: str
    created_at: str | None = None
