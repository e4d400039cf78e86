"""
Utility functions for SchemeFlow
"""

from .validators import (
    generate_scheme_id,
    validate_scheme_name,
    validate_level,
    matches_search
)

__all__ = [
    "generate_scheme_id",
    "validate_scheme_name",
    "validate_level",
    "matches_search"
]
