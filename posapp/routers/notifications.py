from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from posapp.core.schemas import json_response
from posapp.database import get_db
from posapp.models.message_template import MessageTemplate
from posapp.routers.auth_deps import require_tenant
from posapp.schemas.notification import (
    MessageTemplateCreate,
    MessageTemplateResponse,
    MessageTemplateUpdate,
    RenderRequest,
    RenderResponse,
)
from posapp.services.notification import NotificationTemplateService, get_required_variables

router = APIRouter(prefix="/tenants/{tenant_id}/notification-templates", tags=["notifications"])


def _to_response(template: MessageTemplate) -> MessageTemplateResponse:
    return MessageTemplateResponse(
        id=template.id,
        name=template.name,
        event=template.event,
        message=template.message,
        is_custom=template.is_custom,
        required_variables=get_required_variables(template.message),
    )


@router.get("")
def list_templates(tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    templates = NotificationTemplateService(db, tenant_id).list()
    return json_response([_to_response(t) for t in templates], "Notification templates retrieved successfully")


@router.post("")
def create_template(
    payload: MessageTemplateCreate,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    template = NotificationTemplateService(db, tenant_id).create(payload)
    return json_response(_to_response(template), "Notification template created successfully", 201)


@router.put("/{template_id}")
def update_template(
    template_id: str,
    payload: MessageTemplateUpdate,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    template = NotificationTemplateService(db, tenant_id).update(template_id, payload)
    return json_response(_to_response(template), "Notification template updated successfully")


@router.post("/{template_id}/render")
def render_template(
    template_id: str,
    payload: RenderRequest,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    result = NotificationTemplateService(db, tenant_id).render(template_id, payload.variables, payload.strict)
    return json_response(RenderResponse(**result), "Notification template rendered")
