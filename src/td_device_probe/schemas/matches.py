from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True

class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"

class FieldMatch(CamelModel):
    path: str
    key: str
    value: Any = None
    type: str
    looks_like_computer_name: bool
    reason: str | None = None

class NameMatch(CamelModel):
    path: str
    key: str
    value: str
    confidence: Confidence
