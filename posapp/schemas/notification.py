from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union

from posapp.models.message_template import MessageEvent


class MessageTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    event: MessageEvent = MessageEvent.CUSTOM
    message: str = Field(min_length=1)


class MessageTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    message: Optional[str] = Field(default=None, min_length=1)


class MessageTemplateResponse(BaseModel):
    id: str
    name: str
    event: str
    message: str
    is_custom: bool
    required_variables: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class RenderRequest(BaseModel):
    variables: Dict[str, Union[str, int, float]] = {}
    strict: bool = False


class RenderResponse(BaseModel):
    message: str
    missing_variables: List[str] = []
