"""인증 서비스 — 로그인, 토큰 갱신 비즈니스 로직.

Auth Service — Business logic for login and token refresh.
Tokens are stateless JWTs; the refresh flow re-reads the user so that
deactivated accounts and role changes take effect on the next refresh.
"""

from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, RefreshRequest, TokenResponse, UserMeResponse
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import create_access_token, create_refresh_token, decode_token
from app.utils.password import verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스."""

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        return {
            "sub": str(user.id),
            "org": str(user.organization_id),
            "role": user.role,
        }

    def _generate_tokens(self, user: User) -> TokenResponse:
        payload: dict[str, str] = self._build_jwt_payload(user)
        return TokenResponse(
            access_token=create_access_token(payload),
            refresh_token=create_refresh_token(payload),
        )

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """이메일/비밀번호로 로그인합니다.

        Authenticate with email and password.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 로그인 요청 (Login request)

        Returns:
            TokenResponse: 액세스/리프레시 토큰 (Access and refresh tokens)

        Raises:
            UnauthorizedError: 자격 증명 불일치 또는 비활성 계정
                               (Bad credentials or inactive account)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        if not user.active:
            raise UnauthorizedError("Account is deactivated")
        return self._generate_tokens(user)

    async def refresh(self, db: AsyncSession, data: RefreshRequest) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Exchange a valid refresh token for a new token pair.

        Raises:
            UnauthorizedError: 토큰이 유효하지 않거나 사용자가 비활성
                               (Invalid token or inactive user)
        """
        try:
            payload: dict = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid or expired refresh token")
        if payload.get("type") != "refresh" or "sub" not in payload:
            raise UnauthorizedError("Invalid token type")

        user: User | None = await user_repository.get_by_id(db, UUID(payload["sub"]))
        if user is None or not user.active:
            raise UnauthorizedError("User not found or inactive")
        return self._generate_tokens(user)

    def me(self, user: User) -> UserMeResponse:
        return UserMeResponse(
            id=str(user.id),
            organization_id=str(user.organization_id),
            email=user.email,
            display_name=user.display_name,
            role=user.role,
            is_admin=user.is_admin,
            is_supervisor=user.is_supervisor,
            is_volunteer=user.is_volunteer,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
