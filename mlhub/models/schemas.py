"""
Schemas de entrada da API
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    organization_name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value or "." not in value.split("@")[-1]:
            raise ValueError("Email inválido")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RefreshRequest(BaseModel):
    refresh_token: str


class OAuthCallbackRequest(BaseModel):
    code: str
    state: Optional[str] = None


class AnswerQuestionRequest(BaseModel):
    text: str = Field(min_length=1, max_length=2000)


class ItemUpdateRequest(BaseModel):
    """Campos permitidos na edição rápida de anúncios"""
    title: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    available_quantity: Optional[int] = Field(default=None, ge=0)
    status: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ItemCreateRequest(BaseModel):
    """Publicação de anúncio; atributos extras seguem direto para a API"""
    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1)
    category_id: str
    price: float = Field(gt=0)
    currency_id: str = "BRL"
    available_quantity: int = Field(ge=1)
    buying_mode: str = "buy_it_now"
    listing_type_id: str = "gold_special"
    condition: str = "new"
    description: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude_none=True)
        description = payload.pop("description", None)
        if description:
            payload["description"] = {"plain_text": description}
        return payload


class ItemDescriptionRequest(BaseModel):
    plain_text: str = Field(min_length=1)


class ItemRelistRequest(BaseModel):
    price: float = Field(gt=0)
    quantity: int = Field(ge=1)
    listing_type_id: str = "gold_special"


class MessageRequest(BaseModel):
    buyer_id: int
    text: str = Field(min_length=1, max_length=350)


class ClaimMessageRequest(BaseModel):
    message: str = Field(min_length=1)
    receiver_role: str = "complainant"


class OrderNoteRequest(BaseModel):
    note: str = Field(min_length=1, max_length=300)


class FeedbackReplyRequest(BaseModel):
    text: str = Field(min_length=1, max_length=160)


class SyncRequest(BaseModel):
    days_back: Optional[int] = Field(default=None, ge=1, le=365)


class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    plan: Optional[str] = None


class RoleUpdate(BaseModel):
    role: str


class PlanUpdate(BaseModel):
    plan: str


class ActivateUserRequest(BaseModel):
    duration_days: Optional[int] = Field(default=None, ge=1)


class ExtendAccessRequest(BaseModel):
    days: int = Field(ge=1)
