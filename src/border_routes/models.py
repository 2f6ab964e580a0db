"""
Request/response models for route finding.
"""

from typing import List, Optional, Annotated

from pydantic import BaseModel, Field, field_validator, ValidationInfo

from border_routes.config import ResolverMode


class RouteRequest(BaseModel):
    """Request model for finding border routes between two countries."""
    from_country: Annotated[str, Field(min_length=1)] = Field(..., description="Starting country, common name or cca3 code")
    to_country: Annotated[str, Field(min_length=1)] = Field(..., description="Destination country, common name or cca3 code")
    mode: Optional[ResolverMode] = Field(None, description="Border lookup mode; the configured default when omitted")

    @field_validator("from_country", "to_country")
    @classmethod
    def names_must_be_non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Country names must be non-empty")
        return v.strip()

    @field_validator("to_country")
    @classmethod
    def countries_must_be_different(cls, v: str, info: ValidationInfo) -> str:
        start = info.data.get("from_country")
        if start and v.casefold() == start.casefold():
            raise ValueError("Start and destination countries must be different")
        return v


class RouteReport(BaseModel):
    """Outcome of a route search, with codes mapped back to display names."""
    from_country: str = Field(..., description="Display name of the starting country")
    to_country: str = Field(..., description="Display name of the destination country")
    ok: bool = Field(..., description="False when a border lookup failed")
    query_count: int = Field(..., ge=0, description="Number of border lookups issued, failed round included")
    hop_count: Optional[int] = Field(None, description="Borders crossed on every shortest route; None when there is none")
    routes: List[List[str]] = Field(default_factory=list, description="Shortest routes as display names")
    codes: List[List[str]] = Field(default_factory=list, description="Shortest routes as cca3 codes")
    error: Optional[str] = Field(None, description="Lookup error message when ok is False")
    computation_time_ms: float = Field(0.0, description="Time taken by the search in milliseconds")
