"""
Pydantic models for patients and eligibility profiles
"""
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator, ConfigDict
from pydantic.alias_generators import to_camel

from .common import CamelModel, Category, Gender, get_current_utc_time
from .scheme import Scheme


class EligibilityProfile(CamelModel):
    """The patient attributes scheme eligibility depends on"""
    age: int = Field(..., ge=0, le=150, description="Patient's age")
    income: float = Field(..., ge=0, description="Annual household income")
    category: Category = Field(..., description="Social category")
    gender: Gender = Field(..., description="Patient's gender")

    @field_validator("gender", "category", mode="before")
    @classmethod
    def lowercase_choice(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class PatientCreate(EligibilityProfile):
    """Patient registration submitted from a facility"""
    name: str = Field(..., min_length=2, description="Full name")
    address: str = Field(..., min_length=5)
    contact: str = Field(..., min_length=5, description="Phone number or other contact")
    medical_history: str = Field("", description="Free-text medical history")
    disease: str = Field(..., min_length=1, description="Disease or condition")
    additional_notes: Optional[str] = None
    insurance_status: bool = Field(False, description="Whether the patient is insured")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Ravi Kumar",
                "age": 45,
                "gender": "male",
                "address": "12 Station Road, Nashik",
                "contact": "9876543210",
                "medicalHistory": "Type 2 diabetes",
                "disease": "Diabetic nephropathy",
                "income": 30000,
                "category": "sc",
                "insuranceStatus": False
            }
        }
    )


class Patient(PatientCreate):
    """Registered patient with its recommendation snapshot"""
    id: str
    # Patients loaded from storage may predate the form's required fields
    name: str
    address: str = ""
    contact: str = ""
    disease: Optional[str] = None
    created_at: datetime = Field(default_factory=get_current_utc_time)
    updated_by: str = ""
    recommended_schemes: List[Scheme] = Field(default_factory=list)
