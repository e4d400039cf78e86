"""
Utility functions for validation and identifier generation
"""
import re
import hashlib

from ..models.common import APPROVAL_LEVELS


def generate_scheme_id(scheme_name: str) -> str:
    """
    Generate a scheme ID from its name

    Args:
        scheme_name: Name of the scheme

    Returns:
        Slug of the name with a short hash suffix, e.g. ``senior-care-plus-1a2b3c4d``
    """
    # Clean the scheme name
    clean_name = re.sub(r'[^\w\s-]', '', scheme_name.lower())

    # Replace spaces and underscores with hyphens
    clean_name = re.sub(r'[\s_-]+', '-', clean_name)

    # Remove leading/trailing hyphens
    clean_name = clean_name.strip('-')

    # Ensure the ID is not too long
    if len(clean_name) > 50:
        clean_name = clean_name[:50].rstrip('-')

    # Add hash suffix for uniqueness
    hash_suffix = hashlib.md5(scheme_name.encode()).hexdigest()[:8]
    if not clean_name:
        return f"scheme-{hash_suffix}"
    return f"{clean_name}-{hash_suffix}"


def validate_scheme_name(scheme_name: str) -> bool:
    """
    Validate scheme name

    Args:
        scheme_name: Name to validate

    Returns:
        True if valid, False otherwise
    """
    if not scheme_name or not scheme_name.strip():
        return False

    # Check length
    if len(scheme_name.strip()) < 3 or len(scheme_name.strip()) > 200:
        return False

    # Letters, numbers, spaces and common punctuation
    if not re.match(r"^[\w\s\-\(\)\.,/&'+]+$", scheme_name):
        return False

    return True


def validate_level(level: str) -> bool:
    """True if ``level`` is a tier of the approval chain"""
    return level in APPROVAL_LEVELS


def matches_search(search: str, *fields: str) -> bool:
    """Case-insensitive substring match against any of ``fields``"""
    needle = search.strip().lower()
    if not needle:
        return True
    return any(needle in (field or "").lower() for field in fields)
