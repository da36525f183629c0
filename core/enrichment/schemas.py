"""
Pydantic models for responses from the upstream enrichment services.

Every field has a default so a missing field is a designed case:
- ExtractionResult: skill-extraction response for one document (resume or JD)
- SimilarityResult: batch semantic similarity response for one JD
"""
import logging
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class EmploymentGaps(BaseModel):
    """Employment gap summary parsed from a resume."""
    model_config = ConfigDict(extra='ignore')

    total_gap_months: int = 0

    @field_validator('total_gap_months', mode='before')
    @classmethod
    def _coerce_months(cls, value):
        if value is None:
            return 0
        try:
            return max(0, int(float(value)))
        except (TypeError, ValueError):
            return 0


class ParsedProject(BaseModel):
    """A single project from a resume's project history."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    name: str = Field(default="", alias="project_name")
    description: str = ""
    technologies_used: List[str] = Field(default_factory=list)

    @field_validator('name', 'description', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return value or ""

    @field_validator('technologies_used', mode='before')
    @classmethod
    def _clean_technologies(cls, value):
        if not value:
            return []
        return [str(t) for t in value if t]


class ParsedDetails(BaseModel):
    """Structured details parsed from a resume."""
    model_config = ConfigDict(extra='ignore')

    employment_gaps: Optional[EmploymentGaps] = None
    projects: Optional[List[ParsedProject]] = None


class ExtractionResult(BaseModel):
    """
    Skill-extraction response.

    Resume extraction fills skills, candidate name/experience and parsed
    details. JD extraction fills skills, preferred skills and the
    required experience.
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list, alias="preferredSkills")
    candidate_name: Optional[str] = Field(default=None, alias="candidateName")
    candidate_experience: Optional[float] = Field(default=None, alias="candidateExperience")
    required_experience: Optional[float] = Field(default=None, alias="requiredExperience")
    parsed_details: Optional[ParsedDetails] = Field(default=None, alias="parsedDetails")

    @field_validator('candidate_experience', 'required_experience', mode='before')
    @classmethod
    def _coerce_years(cls, value, info):
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparseable {info.field_name}: {value!r}")
            return None

    @field_validator('skills', 'preferred_skills', mode='before')
    @classmethod
    def _clean_skills(cls, value):
        if not value:
            return []
        return [str(s).strip() for s in value if s and str(s).strip()]


class SimilarityItem(BaseModel):
    """Similarity of one resume to the JD, expected in [0, 1]."""
    model_config = ConfigDict(extra='ignore')

    id: str
    score: float = 0.0

    @field_validator('id', mode='before')
    @classmethod
    def _id_to_str(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('score', mode='before')
    @classmethod
    def _none_to_zero(cls, value):
        return 0.0 if value is None else value


class SimilarityResult(BaseModel):
    """
    Batch similarity response. Resumes absent from results score 0.

    Items are validated one at a time; a malformed item is dropped with a
    warning and the rest of the batch is kept.
    """
    model_config = ConfigDict(extra='ignore')

    results: List[SimilarityItem] = Field(default_factory=list)

    @field_validator('results', mode='before')
    @classmethod
    def _drop_malformed_items(cls, value):
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        items = []
        for raw in value:
            try:
                items.append(SimilarityItem.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed similarity item {raw!r}: {e.error_count()} error(s)")
        return items
