from datetime import datetime
from typing import Any

from td_device_probe.schemas.matches import CamelModel, FieldMatch, NameMatch

class EndpointFields(CamelModel):
    endpoint: str
    fields: list[FieldMatch]

class ExplorationResult(CamelModel):
    user_id: str
    company_id: str
    timestamp: datetime
    data_found: dict[str, Any]
    errors: dict[str, str]
    potential_computer_name_fields: list[EndpointFields]

class ExplorationSummary(CamelModel):
    endpoints_worked: int
    endpoints_failed: int
    potential_computer_name_fields: int
    recommendations: list[str]

class ExploreResponse(CamelModel):
    success: bool
    message: str
    summary: ExplorationSummary
    data: ExplorationResult

class Finding(CamelModel):
    endpoint: str
    description: str
    computer_names: list[NameMatch] | None = None
    error: str | None = None
    success: bool
    note: str | None = None

class SearchResult(CamelModel):
    user_id: str
    target_pattern: str
    findings: list[Finding]
    recommendations: list[str]

class SearchResponse(CamelModel):
    success: bool
    message: str
    data: SearchResult
