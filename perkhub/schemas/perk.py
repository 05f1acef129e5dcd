from pydantic import BaseModel, Field, conint, constr
from typing import Optional, List
from datetime import datetime
from ..models import PerkCategory

class PerkBase(BaseModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=200)
    description: str = ""
    category: PerkCategory = PerkCategory.OTHER
    discount_percent: conint(ge=0, le=100) = 0
    merchant: constr(strip_whitespace=True, min_length=1, max_length=200)

class PerkCreate(PerkBase):
    pass

class PerkUpdate(BaseModel):
    title: Optional[constr(strip_whitespace=True, min_length=1, max_length=200)] = None
    description: Optional[str] = None
    category: Optional[PerkCategory] = None
    discount_percent: Optional[conint(ge=0, le=100)] = None
    merchant: Optional[constr(strip_whitespace=True, min_length=1, max_length=200)] = None

class PerkRead(PerkBase):
    id: int
    created_by: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class PerkResponse(BaseModel):
    perk: PerkRead

class PerkListResponse(BaseModel):
    perks: List[PerkRead] = Field(default_factory=list)
