from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Advocate(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    id: str
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: tuple[str, ...] = ()
    years_of_experience: int = Field(..., ge=0)
    phone_number: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class AdvocateListResponse(BaseModel):
    data: list[Advocate]


class RecommendRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Free-text description of the user's need")
    advocates: list[Advocate] = Field(default_factory=list)

    @field_validator("query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value


class RecommendResponse(BaseModel):
    recommendation: str | None = None
    advocate: Advocate | None = None
