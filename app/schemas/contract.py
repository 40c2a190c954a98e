# app/schemas/contract.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class ClientContractCreate(BaseModel):
    full_name: str = Field(min_length=2)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    site_id: int
    start_date: datetime
    end_date: datetime
    monthly_fee: int = Field(ge=0)     # whole currency units
    plan_name: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ContractRenew(BaseModel):
    new_end_date: datetime
    payment_date: datetime
    monthly_fee: Optional[int] = Field(default=None, ge=0)


class ClientOut(BaseModel):
    id: int
    email: str
    full_name: str
    role: str

    class Config:
        from_attributes = True


class ContractAlertOut(BaseModel):
    id: int
    contract_id: int
    alert_type: str
    status: str
    message: str
    created_at: datetime
    updated_at: Optional[datetime]
    resolved_at: Optional[datetime]

    class Config:
        from_attributes = True


class ContractOut(BaseModel):
    id: int
    user_id: int
    site_id: int
    start_date: datetime
    end_date: datetime
    status: str
    plan_name: str
    monthly_fee: int
    is_recurring: bool
    last_payment_date: Optional[datetime]
    next_payment_date: Optional[datetime]
    user: Optional[ClientOut] = None
    pending_alerts: list[ContractAlertOut] = []

    class Config:
        from_attributes = True
