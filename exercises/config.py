"""Configuration for exercise validation.

These configuration models hold the constraint tables every component shares
(question-count bounds per level, enumerations, SEO length targets), so the
validator and the content store read the same immutable values.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models import SCHEMA_VERSION, Domain, Level


class QuestionBounds(BaseModel):
    """Inclusive question-count range for one level."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=1)
    max: int = Field(ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> "QuestionBounds":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self


class LengthBounds(BaseModel):
    """Recommended character-length range for an SEO string."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)


class ValidatorConfig(BaseModel):
    """Master configuration for record validation."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = SCHEMA_VERSION
    levels: tuple[str, ...] = tuple(level.value for level in Level)
    domains: tuple[str, ...] = tuple(domain.value for domain in Domain)
    question_bounds: dict[str, QuestionBounds] = Field(
        default_factory=lambda: {
            Level.CP.value: QuestionBounds(min=6, max=12),
            Level.CE1.value: QuestionBounds(min=8, max=15),
            Level.CE2.value: QuestionBounds(min=12, max=18),
        }
    )
    seo_title: LengthBounds = LengthBounds(min=30, max=60)
    seo_description: LengthBounds = LengthBounds(min=100, max=160)
    matching_type: str = "relier"
    date_pattern: str = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
    slug_pattern: str = r"^[a-z0-9-]+$"

    def bounds_for(self, level: str) -> QuestionBounds | None:
        """Question bounds for a level, or None for an unknown level."""
        return self.question_bounds.get(level)


DEFAULT_CONFIG = ValidatorConfig()
