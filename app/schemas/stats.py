"""
Schemas for the pandemic statistics lookup.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PandemicStats(BaseModel):
    """
    One country's reported counts, decoded from the upstream JSON field names.

    Values are passed through as decoded; missing or null counts become 0.
    Counts must be JSON integers: strings and floats are rejected rather
    than coerced.
    """
    model_config = ConfigDict(populate_by_name=True, strict=True)

    country: str = ""
    total_cases: int = Field(default=0, alias="cases")
    todays_cases: int = Field(default=0, alias="todayCases")
    total_deaths: int = Field(default=0, alias="deaths")
    todays_deaths: int = Field(default=0, alias="todayDeaths")
    recovered: int = 0
    active: int = 0
    critical: int = 0
    cases_per_million: int = Field(default=0, alias="casesPerOneMillion")
    deaths_per_million: int = Field(default=0, alias="deathsPerOneMillion")
    total_tests: int = Field(default=0, alias="totalTests")
    tests_per_million: int = Field(default=0, alias="testsPerOneMillion")

    @field_validator(
        "total_cases", "todays_cases", "total_deaths", "todays_deaths",
        "recovered", "active", "critical", "cases_per_million",
        "deaths_per_million", "total_tests", "tests_per_million",
        mode="before",
    )
    @classmethod
    def null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("country", mode="before")
    @classmethod
    def null_country(cls, value: Any) -> Any:
        return "" if value is None else value


class StatsRequest(BaseModel):
    """Request schema for a stats-augmented headline view."""
    country: str = Field(..., min_length=1, description="Country name passed verbatim to the stats API")


class PandemicStatsResponse(BaseModel):
    """Response schema for pandemic statistics."""
    country: str
    total_cases: int
    todays_cases: int
    total_deaths: int
    todays_deaths: int
    recovered: int
    active: int
    critical: int
    cases_per_million: int
    deaths_per_million: int
    total_tests: int
    tests_per_million: int

    model_config = ConfigDict(from_attributes=True)
