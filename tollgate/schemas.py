from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, Union


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VehicleMovementRequest(CamelModel):
    interchange: Optional[str] = None
    number_plate: Optional[str] = None
    date_time: Optional[datetime] = None


class VehicleEntryOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    number_plate: str
    entry_interchange: str
    entry_date_time: datetime


class VehicleEntryResponse(CamelModel):
    message: str
    entry: VehicleEntryOut


class TollBreakdownResponse(CamelModel):
    base_rate: float
    distance_cost: float
    distance_breakdown: str
    sub_total: float
    discount: float
    total_charged: float
    message: str


class InterchangeOut(BaseModel):
    name: str
    distance: Union[int, float]


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    interchange: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    interchange: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class LoginResponse(CamelModel):
    message: str
    interchange: str
    access_token: str
    token_type: str = "bearer"
