"""Route calendar schemas - weekdays 1 (Monday) to 7 (Sunday)"""
from pydantic import BaseModel, Field, field_validator


class RouteCalendarResponse(BaseModel):
    id: int
    giro: str
    giorni: list[int] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class RouteCalendarUpdate(BaseModel):
    giorni: list[int] = Field(default_factory=list)

    @field_validator("giorni")
    @classmethod
    def valid_weekdays(cls, v: list[int]) -> list[int]:
        for d in v:
            if not 1 <= d <= 7:
                raise ValueError("weekdays are 1 (Monday) to 7 (Sunday)")
        return sorted(set(v))
