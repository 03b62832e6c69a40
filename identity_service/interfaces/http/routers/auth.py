from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from slowapi import Limiter

from ....application.use_cases.auth import AuthService
from ....config import settings
from ....domain.errors import ErrorKind
from ..authz import get_auth_service, get_claims
from ..responses import unwrap
from ..schemas import LoginReq, TokenResp

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

def get_limiter(request: Request) -> Limiter:
    return request.app.state.limiter

def _login_impl(request: Request, payload: LoginReq, svc: AuthService):
    result = svc.login(payload.username, payload.password)
    # unknown user and wrong password look the same from outside
    if not result.ok and result.kind in (ErrorKind.ACCOUNT_NOT_FOUND, ErrorKind.INVALID_CREDENTIALS):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return unwrap(result)

@router.post("/login", response_model=TokenResp)
def login(
    request: Request,
    payload: LoginReq,
    svc: AuthService = Depends(get_auth_service),
    limiter: Limiter = Depends(get_limiter)
):
    # stricter limit than the rest of the API against brute force
    limited_func = limiter.limit(f"{settings.LOGIN_RATE_LIMIT_PER_MINUTE}/minute")(_login_impl)
    return limited_func(request, payload, svc)

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(claims: dict = Depends(get_claims), svc: AuthService = Depends(get_auth_service)):
    svc.logout(claims)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/refresh-token", response_model=TokenResp)
def refresh_token(claims: dict = Depends(get_claims), svc: AuthService = Depends(get_auth_service)):
    result = svc.refresh(claims)
    if not result.ok and result.kind == ErrorKind.ACCOUNT_NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return unwrap(result)
