"""Wire models for the company lookup service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from roicalc.models.enums import LookupKind, LookupStatus

# CompanyProfile attribute -> InputModel key
SUGGESTION_FIELDS: dict[str, str] = {
    "monthly_visitors": "monthly_visitors",
    "avg_revenue_per_conversion": "avg_revenue_per_conversion",
    "current_conversion_rate": "current_conversion_rate",
    "current_bounce_rate": "current_bounce_rate",
    "marketing_team_size": "marketing_team_size",
    "number_of_cms": "number_of_cms",
}


class CompanyProfile(BaseModel):
    """Company data returned by the lookup service."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    industry: str = ""
    monthly_visitors: Optional[float] = Field(default=None, alias="monthlyVisitors")
    avg_revenue_per_conversion: Optional[float] = Field(default=None, alias="avgRevenuePerConversion")
    current_conversion_rate: Optional[float] = Field(default=None, alias="currentConversionRate")
    current_bounce_rate: Optional[float] = Field(default=None, alias="currentBounceRate")
    marketing_team_size: Optional[float] = Field(default=None, alias="marketingTeamSize")
    number_of_cms: Optional[float] = Field(default=None, alias="numberOfCMS")

    def suggestions(self) -> dict[str, float]:
        """Only the numeric fields the service actually returned."""
        out: dict[str, float] = {}
        for attr, key in SUGGESTION_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out


class LookupResponse(BaseModel):
    success: bool
    data: Optional[CompanyProfile] = None
    error: Optional[str] = None


@dataclass
class LookupResult:
    """Outcome of one lookup as seen by the caller."""

    query: str
    kind: LookupKind
    status: LookupStatus
    profile: Optional[CompanyProfile] = None
    error: Optional[str] = None
    generation: int = 0
    suggestions: dict[str, float] = field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return self.status is LookupStatus.FOUND and self.profile is not None

    @classmethod
    def no_data(cls, query: str, kind: LookupKind, error: str) -> LookupResult:
        return cls(query=query, kind=kind, status=LookupStatus.NO_DATA, error=error)
