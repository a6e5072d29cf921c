"""
Notification templates: {{variable}} substitution for tenant messages.

Rendering is plain string replacement. Placeholders with no supplied value
are left untouched unless the caller asks for strict rendering.
"""
import re
from typing import Dict, List, Union

from posapp.core.exceptions import AccessDeniedError, NotFoundError, ValidationError
from posapp.models.message_template import MessageTemplate
from posapp.schemas.notification import MessageTemplateCreate, MessageTemplateUpdate
from posapp.services.base import BaseService

VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")

Variables = Dict[str, Union[str, int, float]]


def render_message(message: str, variables: Variables) -> str:
    for key, value in variables.items():
        message = message.replace("{{" + key + "}}", str(value))
    return message


def get_required_variables(message: str) -> List[str]:
    """Placeholder names in first-seen order, without duplicates."""
    seen: List[str] = []
    for name in VARIABLE_PATTERN.findall(message):
        if name not in seen:
            seen.append(name)
    return seen


def missing_variables(message: str, variables: Variables) -> List[str]:
    return [name for name in get_required_variables(message) if name not in variables]


class NotificationTemplateService(BaseService):

    def list(self) -> List[MessageTemplate]:
        return self.db.query(MessageTemplate).filter(
            MessageTemplate.tenant_id == self.tenant_id
        ).order_by(MessageTemplate.name).all()

    def get(self, template_id: str) -> MessageTemplate:
        template = self.db.query(MessageTemplate).filter(
            MessageTemplate.id == template_id,
            MessageTemplate.tenant_id == self.tenant_id,
        ).first()
        if template is None:
            raise NotFoundError("Notification template not found", details={"template_id": template_id})
        return template

    def create(self, data: MessageTemplateCreate) -> MessageTemplate:
        template = MessageTemplate(
            tenant_id=self.tenant_id,
            name=data.name,
            event=data.event.value,
            message=data.message,
            is_custom=True,
        )
        self.db.add(template)
        self.commit(template)
        return template

    def update(self, template_id: str, data: MessageTemplateUpdate) -> MessageTemplate:
        template = self.get(template_id)
        if not template.is_custom:
            raise AccessDeniedError("Cannot edit system template")
        if data.name is not None:
            template.name = data.name
        if data.message is not None:
            template.message = data.message
        self.commit(template)
        return template

    def render(self, template_id: str, variables: Variables, strict: bool = False) -> Dict[str, object]:
        template = self.get(template_id)
        missing = missing_variables(template.message, variables)
        if strict and missing:
            raise ValidationError(
                "Missing template variables",
                details={"missing_variables": missing},
            )
        return {
            "message": render_message(template.message, variables),
            "missing_variables": missing,
        }
