from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from posapp.core.schemas import json_response
from posapp.database import get_db
from posapp.routers.auth_deps import require_tenant
from posapp.schemas.staff import StaffCreate, StaffResponse
from posapp.schemas.subscription import LimitCheckResponse
from posapp.services.staff_service import StaffService
from posapp.services.subscription_limit import check_limit, get_limits_for_tenant

router = APIRouter(prefix="/tenants/{tenant_id}", tags=["staffs"])


@router.post("/staffs")
def create_staff(payload: StaffCreate, tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    staff = StaffService(db, tenant_id).create(payload)
    return json_response(StaffResponse.model_validate(staff), "Staff created successfully", 201)


@router.get("/staffs")
def list_staffs(tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    staffs = StaffService(db, tenant_id).list()
    return json_response([StaffResponse.model_validate(s) for s in staffs], "Staffs retrieved successfully")


@router.get("/limits")
def get_limits(tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    return json_response(get_limits_for_tenant(db, tenant_id), "Subscription limits retrieved successfully")


@router.get("/limits/{resource}")
def check_resource_limit(resource: str, tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    allowed = check_limit(db, tenant_id, resource)
    return json_response(LimitCheckResponse(resource=resource, allowed=allowed), "Limit checked")
