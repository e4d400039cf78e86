"""
Default scheme catalog and user directory used when nothing else is configured
"""
from typing import List

from .models.scheme import Scheme
from .models.user import User


DEFAULT_SCHEMES: List[dict] = [
    {
        "id": "health-for-all",
        "name": "Health For All",
        "description": "Basic hospitalisation cover for low-income households.",
        "eligibilityCriteria": {
            "income": {"max": 250000}
        },
        "benefits": [
            "Cashless hospitalisation up to 5 lakh per family per year",
            "Pre- and post-hospitalisation expenses"
        ],
        "documents": ["Aadhaar card", "Income certificate", "Ration card"]
    },
    {
        "id": "senior-care-plus",
        "name": "Senior Care Plus",
        "description": "Chronic-care and hospitalisation support for senior citizens.",
        "eligibilityCriteria": {
            "age": {"min": 60},
            "income": {"max": 300000}
        },
        "benefits": [
            "Free outpatient consultations",
            "Subsidised medicines for chronic conditions"
        ],
        "documents": ["Aadhaar card", "Age proof"]
    },
    {
        "id": "universal-health-coverage",
        "name": "Universal Health Coverage",
        "description": "Primary-care coverage available to every resident.",
        "eligibilityCriteria": {},
        "benefits": ["Free primary-care visits", "Free essential diagnostics"],
        "documents": ["Aadhaar card"]
    },
    {
        "id": "child-health-initiative",
        "name": "Child Health Initiative",
        "description": "Screening and treatment for children under 18.",
        "eligibilityCriteria": {
            "age": {"max": 17}
        },
        "benefits": ["Free screening for 30 conditions", "Free surgery where needed"],
        "documents": ["Birth certificate", "Parent's Aadhaar card"]
    },
    {
        "id": "maternal-health-support",
        "name": "Maternal Health Support",
        "description": "Cash assistance and institutional delivery support for mothers.",
        "eligibilityCriteria": {
            "age": {"min": 18, "max": 45},
            "gender": ["female"]
        },
        "benefits": ["Cash assistance of 6000", "Free institutional delivery"],
        "documents": ["Aadhaar card", "Mother and child protection card"]
    },
    {
        "id": "sc-st-critical-care",
        "name": "SC/ST Critical Illness Assistance",
        "description": "Financial assistance for critical illness treatment.",
        "eligibilityCriteria": {
            "age": {"min": 18, "max": 60},
            "income": {"max": 50000},
            "category": ["sc", "st"]
        },
        "benefits": ["Treatment grant up to 2 lakh"],
        "documents": ["Caste certificate", "Income certificate", "Medical estimate"]
    }
]


DEFAULT_USERS: List[dict] = [
    {
        "id": "u-facility",
        "name": "Anita Desai",
        "email": "facility@schemeflow.in",
        "role": "facility",
        "facility": "Primary Health Center"
    },
    {
        "id": "u-hospital",
        "name": "Dr. Suresh Rao",
        "email": "hospital@schemeflow.in",
        "role": "hospital",
        "hospital": "City Hospital"
    },
    {
        "id": "u-district",
        "name": "Meena Pillai",
        "email": "district@schemeflow.in",
        "role": "district",
        "district": "Nashik"
    },
    {
        "id": "u-state",
        "name": "Rajesh Kulkarni",
        "email": "state@schemeflow.in",
        "role": "state",
        "state": "Maharashtra"
    },
    {
        "id": "u-super",
        "name": "System Administrator",
        "email": "admin@schemeflow.in",
        "role": "super"
    }
]


def default_schemes() -> List[Scheme]:
    return [Scheme.model_validate(s) for s in DEFAULT_SCHEMES]


def default_users() -> List[User]:
    return [User.model_validate(u) for u in DEFAULT_USERS]
