from pydantic import BaseModel
from typing import List

class FieldInfo(BaseModel):
    id: str
    name: str
    price: str
    capacity: str

class TimeSlotInfo(BaseModel):
    id: str
    label: str

class FieldOwner(BaseModel):
    name: str
    surname: str
    iban: str

class CatalogResponse(BaseModel):
    fields: List[FieldInfo]
    time_slots: List[TimeSlotInfo]
    field_owner: FieldOwner
