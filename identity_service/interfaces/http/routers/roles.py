from fastapi import APIRouter, Depends

from ....application.converters import account_to_full_dto, role_to_dto
from ....application.use_cases.accounts import AccountLifecycleService
from ....application.use_cases.roles import RoleService
from ..authz import get_account_service, get_role_service, require_admin, require_super_admin
from ..responses import unwrap
from ..schemas import AssignRoleReq, RoleResp, UserResp

router = APIRouter(prefix="/api/v1/roles", tags=["roles"])


@router.get("", response_model=list[RoleResp], dependencies=[Depends(require_admin)])
def list_roles(roles: RoleService = Depends(get_role_service)):
    return [role_to_dto(r) for r in roles.list_roles()]


@router.get("/{role_id}", response_model=RoleResp, dependencies=[Depends(require_admin)])
def get_role(role_id: str, roles: RoleService = Depends(get_role_service)):
    return role_to_dto(unwrap(roles.resolve_role(role_id)))


@router.post("/assign/{account_id}", response_model=UserResp, dependencies=[Depends(require_super_admin)])
def assign_role(
    account_id: str,
    payload: AssignRoleReq,
    svc: AccountLifecycleService = Depends(get_account_service),
):
    return account_to_full_dto(unwrap(svc.assign_role(account_id, payload.role_id)))
