from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from saas_auth.api.error import TOKEN_ERROR_CODES, ClientError, ServerError
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.auth import (
    AuthTokens,
    GoogleAuthUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    PublicProfile,
    RefreshTokenUseCase,
    RegisterUseCase,
    RequestCodeUseCase,
    ResetPasswordUseCase,
    ResetTokenResponse,
    StatusResponse,
    VerifyEmailUseCase,
    VerifyResetCodeUseCase,
)
from saas_auth.context import ServiceContext
from saas_auth.depends import get_current_principal, get_services, get_unit_of_work
from saas_auth.domain.entities import CodePurpose
from saas_auth.domain.principal import Principal

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _raise_sign_in_error(error):
    if error.code == "INVALID_CREDENTIALS":
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    elif error.code in ("AUTHORIZATION_FAILED", "EMAIL_NOT_VERIFIED", "USER_SUSPENDED"):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code in ("CODE_REQUIRED", "OAUTH_EXCHANGE_FAILED"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == "REGISTRATION_CONFLICT":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload
    """

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., max_length=72, description="Password (min 8 chars, a letter and a number)"
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=PublicProfile)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Register a password account.

    No tokens are issued; a verification code is mailed instead.

    Raises:
        - 400 Bad Request: Password policy not met
        - 409 Conflict: Email already registered
        - 500 Internal Server Error: Mail delivery or server error
    """
    use_case = RegisterUseCase(
        uow, services.passwords, services.totp, services.mailer, services.templates
    )
    result = await use_case.execute(request.email, request.name, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("EMAIL_ALREADY_EXISTS", "REGISTRATION_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Password login.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Google-only account, unverified email (a new code
          is mailed) or suspended account
    """
    use_case = LoginUseCase(uow, services.credential_verifier(), services.tokens)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        _raise_sign_in_error(result.error)

    return result.value


class GoogleAuthRequest(BaseModel):
    """
    Google sign-in HTTP request payload
    """

    code: str = Field("", description="Google authorization code")


@router.post("/google", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def google_auth(
    request: GoogleAuthRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Sign in (or sign up) with a Google authorization code.

    Raises:
        - 400 Bad Request: Missing code or failed exchange
        - 403 Forbidden: Email registered without this Google identity,
          unverified or suspended account
        - 409 Conflict: Concurrent first sign-in for the same identity
    """
    use_case = GoogleAuthUseCase(
        uow, services.oauth, services.credential_verifier(), services.tokens, services.totp
    )
    result = await use_case.execute(request.code)

    if result.is_err():
        _raise_sign_in_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload
    """

    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh-tokens", status_code=status.HTTP_200_OK, response_model=AuthTokens)
async def refresh_tokens(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Exchange a refresh token for a new access/refresh pair.

    Raises:
        - 401 Unauthorized: Invalid, expired or wrong-type token, or unknown user
        - 403 Forbidden: Suspended account
    """
    use_case = RefreshTokenUseCase(uow, services.tokens)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code in TOKEN_ERROR_CODES or error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_SUSPENDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.patch("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Mark the account inactive. Outstanding tokens expire on their own.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _raise_code_error(error):
    if error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in ("EMAIL_ALREADY_VERIFIED", "INVALID_VERIFICATION_CODE"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Mail a password reset code.

    Raises:
        - 404 Not Found: Unknown email
    """
    use_case = RequestCodeUseCase(uow, services.totp, services.mailer, services.templates)
    result = await use_case.execute(request.email, CodePurpose.forgot_password)

    if result.is_err():
        _raise_code_error(result.error)

    return result.value


class ResendCodeRequest(BaseModel):
    """
    Resend code HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")
    type: CodePurpose = Field(
        CodePurpose.email_verification,
        description="Flow the code is for: email-verification or forgot-password",
    )


@router.post("/resend-code", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def resend_code(
    request: ResendCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Mail a fresh code for email verification or password reset.

    A verified account asking for an email-verification code gets status
    already_verified and no mail.

    Raises:
        - 404 Not Found: Unknown email
    """
    use_case = RequestCodeUseCase(uow, services.totp, services.mailer, services.templates)
    result = await use_case.execute(request.email, request.type)

    if result.is_err():
        _raise_code_error(result.error)

    return result.value


class SubmitCodeRequest(BaseModel):
    """
    Code submission HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")
    token: str = Field(..., description="Code received by email")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def verify_email(
    request: SubmitCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Verify the account email with a mailed code.

    Raises:
        - 400 Bad Request: Already verified or wrong/expired code
        - 404 Not Found: Unknown email
    """
    use_case = VerifyEmailUseCase(uow, services.totp)
    result = await use_case.execute(request.email, request.token)

    if result.is_err():
        _raise_code_error(result.error)

    return result.value


@router.post(
    "/verify-reset-code", status_code=status.HTTP_200_OK, response_model=ResetTokenResponse
)
async def verify_reset_code(
    request: SubmitCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Trade a password reset code for a reset token.

    Raises:
        - 400 Bad Request: Wrong or expired code
        - 404 Not Found: Unknown email
    """
    use_case = VerifyResetCodeUseCase(uow, services.totp, services.tokens)
    result = await use_case.execute(request.email, request.token)

    if result.is_err():
        _raise_code_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")
    token: str = Field(..., description="Reset token from verify-reset-code")
    password: str = Field(..., max_length=72, description="New password")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Set a new password with a reset token.

    Raises:
        - 400 Bad Request: Password policy not met
        - 401 Unauthorized: Invalid, expired or foreign reset token
    """
    use_case = ResetPasswordUseCase(uow, services.tokens, services.passwords)
    result = await use_case.execute(request.email, request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in TOKEN_ERROR_CODES:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
