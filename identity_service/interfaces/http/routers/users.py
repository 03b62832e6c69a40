from fastapi import APIRouter, Depends, Response, status

from ....application.converters import account_to_full_dto, account_to_profile_dto
from ....application.dto import CreateAccountInput, UpdateProfileInput
from ....application.use_cases.accounts import AccountLifecycleService
from ..authz import ensure_can_grant, get_account_service, get_current_account_id, require_admin
from ..responses import unwrap
from ..schemas import (
    AssignRoleReq,
    ChangePasswordReq,
    CreateUserReq,
    ProfileResp,
    ResetPasswordReq,
    ResetPasswordResp,
    UpdateProfileReq,
    UserResp,
)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _creation_input(payload: CreateUserReq) -> CreateAccountInput:
    return CreateAccountInput(**payload.model_dump())


@router.post("/superadmin/init", response_model=UserResp, status_code=status.HTTP_201_CREATED)
def create_super_admin(payload: CreateUserReq, svc: AccountLifecycleService = Depends(get_account_service)):
    account = unwrap(svc.create_super_admin(_creation_input(payload)))
    return account_to_full_dto(account)


@router.post("", response_model=UserResp, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: CreateUserReq,
    claims: dict = Depends(require_admin),
    svc: AccountLifecycleService = Depends(get_account_service),
):
    ensure_can_grant(claims, payload.role_id)
    account = unwrap(svc.create_account(_creation_input(payload)))
    return account_to_full_dto(account)


@router.get("", response_model=list[ProfileResp], dependencies=[Depends(require_admin)])
def list_users(svc: AccountLifecycleService = Depends(get_account_service)):
    return [account_to_profile_dto(a) for a in svc.list_accounts()]


# --- Current user:

@router.get("/profile", response_model=ProfileResp)
def get_profile(
    account_id: str = Depends(get_current_account_id),
    svc: AccountLifecycleService = Depends(get_account_service),
):
    return account_to_profile_dto(unwrap(svc.get_account(account_id)))


@router.put("/profile", response_model=ProfileResp)
def update_profile(
    payload: UpdateProfileReq,
    account_id: str = Depends(get_current_account_id),
    svc: AccountLifecycleService = Depends(get_account_service),
):
    account = unwrap(svc.update_profile(account_id, UpdateProfileInput(**payload.model_dump())))
    return account_to_profile_dto(account)


@router.put("/change-password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    payload: ChangePasswordReq,
    account_id: str = Depends(get_current_account_id),
    svc: AccountLifecycleService = Depends(get_account_service),
):
    unwrap(svc.change_password(account_id, payload.current_password, payload.new_password))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/reset-password", response_model=ResetPasswordResp)
def reset_password(
    payload: ResetPasswordReq,
    account_id: str = Depends(get_current_account_id),
    svc: AccountLifecycleService = Depends(get_account_service),
):
    temporary = unwrap(svc.reset_password(account_id, payload.current_password))
    return ResetPasswordResp(temporary_password=temporary)


# --- Admin-only:

@router.get("/{account_id}", response_model=UserResp, dependencies=[Depends(require_admin)])
def get_user(account_id: str, svc: AccountLifecycleService = Depends(get_account_service)):
    return account_to_full_dto(unwrap(svc.get_account(account_id)))


@router.put("/{account_id}", response_model=UserResp, dependencies=[Depends(require_admin)])
def update_user(
    account_id: str,
    payload: UpdateProfileReq,
    svc: AccountLifecycleService = Depends(get_account_service),
):
    account = unwrap(svc.update_profile(account_id, UpdateProfileInput(**payload.model_dump())))
    return account_to_full_dto(account)


@router.put("/{account_id}/roles", response_model=UserResp)
def update_user_role(
    account_id: str,
    payload: AssignRoleReq,
    claims: dict = Depends(require_admin),
    svc: AccountLifecycleService = Depends(get_account_service),
):
    ensure_can_grant(claims, payload.role_id)
    account = unwrap(svc.assign_role(account_id, payload.role_id))
    return account_to_full_dto(account)
