from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = 2


class Level(str, Enum):
    """School grade tiers, in teaching order."""

    CP = "CP"
    CE1 = "CE1"
    CE2 = "CE2"


class Domain(str, Enum):
    FRANCAIS = "francais"
    MATHS = "maths"
    QUESTIONNER_LE_MONDE = "questionner-le-monde"
    EMC = "emc"
    ANGLAIS = "anglais"
    ARTS = "arts"
    EPS = "eps"


DOMAIN_LABELS: dict[Domain, str] = {
    Domain.FRANCAIS: "Français",
    Domain.MATHS: "Mathématiques",
    Domain.QUESTIONNER_LE_MONDE: "Questionner le monde",
    Domain.EMC: "EMC",
    Domain.ANGLAIS: "Anglais",
    Domain.ARTS: "Arts",
    Domain.EPS: "EPS",
}

LEVEL_EMOJIS: dict[Level, str] = {
    Level.CP: "🐣",
    Level.CE1: "🦊",
    Level.CE2: "🦁",
}


# ============================================================================
# Exercise Record Models
# ============================================================================


class Question(BaseModel):
    """One graded item of an exercise."""

    prompt: str
    answer: str
    hint: str | None = None
    options: list[str] | None = None
    pair: str | None = None  # counterpart token, "relier" exercises only


class ListCorrection(BaseModel):
    """Answer key with one entry per question, in question order."""

    mode: Literal["list"] = "list"
    v: list[str]


class ShortTextCorrection(BaseModel):
    """Answer key given as a single free-text paragraph."""

    mode: Literal["short_text"] = "short_text"
    v: str


Correction = Annotated[
    ListCorrection | ShortTextCorrection, Field(discriminator="mode")
]


class SEO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    internal_links: list[str] = Field(default_factory=list, alias="internalLinks")
    next_suggestions: list[str] = Field(
        default_factory=list, alias="nextSuggestions"
    )


class ExerciseRecord(BaseModel):
    """A published exercise document.

    Instances are only built from data that passed validation; use
    ``exercises.parse_record`` to go from raw JSON to this model.
    """

    model_config = ConfigDict(frozen=True)

    date: str  # YYYY-MM-DD, format-checked only
    level: Level
    domain: Domain
    skill: str
    type: str
    theme: str
    title: str
    slug: str
    h1: str
    instruction: str
    questions: list[Question]
    correction: Correction
    seo: SEO

    @property
    def year_month(self) -> tuple[str, str]:
        """Year and month folder names derived from the date."""
        year, month, _ = self.date.split("-", 2)
        return year, month

    def to_json_dict(self) -> dict:
        """Serialize with the on-disk field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Validation Result Models
# ============================================================================


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Issue(BaseModel):
    """One diagnostic, addressed by a field path such as ``questions[2].answer``."""

    field: str
    message: str
    severity: Severity = Severity.ERROR


class ValidationResult(BaseModel):
    errors: list[Issue] = Field(default_factory=list)
    warnings: list[Issue] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        """Warnings never affect validity."""
        return len(self.errors) == 0

    @property
    def issues(self) -> list[Issue]:
        return self.errors + self.warnings


class InvalidCandidate(BaseModel):
    """A candidate that failed validation, kept with its verdict."""

    record: Any
    result: ValidationResult


class BatchSummary(BaseModel):
    total: int = 0
    valid: int = 0
    invalid: int = 0
    warnings: int = 0
    errors: int = 0

    @property
    def ok(self) -> bool:
        """True when no error was found anywhere in the batch."""
        return self.errors == 0


class BatchResult(BaseModel):
    valid: list[ExerciseRecord] = Field(default_factory=list)
    invalid: list[InvalidCandidate] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)
