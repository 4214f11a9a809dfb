from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    # Wire format is camelCase (browser clients); Python attributes stay snake_case.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRequest(_CamelModel):
    story_topic: str = Field(
        min_length=1,
        description="What the story is about.",
        examples=["Inflation trends"],
    )
    data_needed: str = Field(
        min_length=1,
        description="The data or statistics the journalist is looking for.",
        examples=["CPI data"],
    )
    timeframe: str = Field(
        min_length=1,
        description="Period the data should cover (free text).",
        examples=["last 5 years"],
    )
    sources: list[str] = Field(
        default_factory=list,
        description="Preferred sources, in order of preference. Empty means any authoritative source.",
        examples=[["BLS", "Census"]],
    )
    deadline: str | None = Field(
        default=None,
        description="Publication deadline (free text).",
        examples=["2024-01-01"],
    )

    @field_validator("sources", mode="before")
    @classmethod
    def _null_sources_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class AnalysisMetadata(_CamelModel):
    story_topic: str = Field(description="Echo of the requested story topic.")
    timeframe: str = Field(description="Echo of the requested timeframe.")
    generated_at: str = Field(
        description="UTC time the response was built (ISO-8601).",
        examples=["2024-01-01T12:00:00.000Z"],
    )


class AnalysisResponse(_CamelModel):
    analysis: str = Field(description="Raw text returned by the language model.")
    metadata: AnalysisMetadata
