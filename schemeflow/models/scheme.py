"""
Pydantic models for schemes and their eligibility criteria
"""
import logging
from typing import ClassVar, List, Optional
from pydantic import Field, ValidationError, ValidationInfo, field_validator, model_validator, ConfigDict
from pydantic.alias_generators import to_camel

from .common import CamelModel, Category, Gender

logger = logging.getLogger(__name__)


class AgeRange(CamelModel):
    """Inclusive age bounds; either side may be open"""
    min: Optional[int] = Field(None, ge=0, description="Minimum age")
    max: Optional[int] = Field(None, ge=0, description="Maximum age")

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Minimum age {self.min} is greater than maximum age {self.max}")
        return self


class IncomeCeiling(CamelModel):
    """Maximum annual income; there is no floor"""
    max: float = Field(..., ge=0, description="Maximum annual income")


def _lowercase_choices(value):
    if isinstance(value, list):
        return [v.strip().lower() if isinstance(v, str) else v for v in value]
    return value


class EligibilityCriteria(CamelModel):
    """
    Optional predicate groups. None means the group imposes no constraint.

    Criteria read back from storage are lenient: a malformed group is logged
    and treated as absent. See ``CriteriaSubmission`` for new input.
    """
    age: Optional[AgeRange] = None
    income: Optional[IncomeCeiling] = None
    category: Optional[List[Category]] = None
    gender: Optional[List[Gender]] = None

    drop_malformed: ClassVar[bool] = True

    @field_validator("age", "income", "category", "gender", mode="wrap")
    @classmethod
    def drop_malformed_group(cls, value, handler, info: ValidationInfo):
        if info.field_name in ("category", "gender"):
            value = _lowercase_choices(value)
        if not cls.drop_malformed:
            return handler(value)
        try:
            return handler(value)
        except ValidationError as e:
            logger.warning(
                f"Ignoring malformed '{info.field_name}' criteria {value!r} "
                f"({e.error_count()} error(s))"
            )
            return None

    def is_unconstrained(self) -> bool:
        return all(
            group is None for group in (self.age, self.income, self.category, self.gender)
        )


class CriteriaSubmission(EligibilityCriteria):
    """Criteria entered by an administrator; a malformed group is a validation error"""
    drop_malformed: ClassVar[bool] = False


class SchemeCreate(CamelModel):
    """Scheme definition submitted by a super-admin"""
    id: Optional[str] = Field(None, description="Scheme identifier, generated from the name when omitted")
    name: str = Field(..., min_length=3, max_length=200, description="Scheme name")
    description: str = Field("", description="Display description")
    eligibility_criteria: CriteriaSubmission = Field(default_factory=CriteriaSubmission)
    benefits: List[str] = Field(default_factory=list)
    documents: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Senior Care Plus",
                "description": "Hospitalisation cover for senior citizens",
                "eligibilityCriteria": {
                    "age": {"min": 60},
                    "income": {"max": 300000}
                },
                "benefits": ["Cashless treatment up to 3 lakh"],
                "documents": ["Aadhaar card", "Age proof"]
            }
        }
    )


class Scheme(SchemeCreate):
    """Scheme stored in the catalog"""
    id: str = Field(..., description="Unique scheme identifier")
    eligibility_criteria: EligibilityCriteria = Field(default_factory=EligibilityCriteria)
