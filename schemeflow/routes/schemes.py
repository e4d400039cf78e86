"""
API routes for scheme catalog management
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from ..exceptions import DuplicateSchemeError, SchemeNotFoundError
from ..models.scheme import Scheme, SchemeCreate
from ..services.scheme_service import SchemeService
from ..utils.validators import validate_scheme_name
from .deps import get_scheme_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.get("", response_model=List[Scheme])
async def get_schemes(
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of schemes to return"),
    offset: int = Query(0, ge=0, description="Number of schemes to skip"),
    service: SchemeService = Depends(get_scheme_service)
):
    """
    Get the scheme catalog
    """
    try:
        schemes = await service.list_schemes()

        # Apply pagination
        return schemes[offset:offset + limit]

    except Exception as e:
        logger.error(f"Error fetching schemes: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve schemes")


@router.post("", response_model=Scheme, status_code=201)
async def create_scheme(
    payload: SchemeCreate,
    service: SchemeService = Depends(get_scheme_service)
):
    """
    Add a scheme to the catalog
    """
    try:
        if not validate_scheme_name(payload.name):
            raise HTTPException(status_code=400, detail=f"Invalid scheme name: {payload.name}")

        return await service.create_scheme(payload)

    except HTTPException:
        raise
    except DuplicateSchemeError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating scheme: {e}")
        raise HTTPException(status_code=500, detail="Failed to create scheme")


@router.get("/{scheme_id}", response_model=Scheme)
async def get_scheme(
    scheme_id: str,
    service: SchemeService = Depends(get_scheme_service)
):
    """
    Get a specific scheme by ID
    """
    try:
        return await service.get_scheme(scheme_id)

    except SchemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Error fetching scheme {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve scheme")


@router.delete("/{scheme_id}")
async def delete_scheme(
    scheme_id: str,
    service: SchemeService = Depends(get_scheme_service)
):
    """
    Remove a scheme from the catalog. Existing recommendations keep their snapshot.
    """
    try:
        await service.delete_scheme(scheme_id)
        return {"message": f"Scheme {scheme_id} deleted successfully"}

    except SchemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Error deleting scheme {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete scheme")
