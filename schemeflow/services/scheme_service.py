"""
Scheme catalog management
"""
import logging
from typing import List

from ..exceptions import DuplicateSchemeError, SchemeNotFoundError
from ..models.scheme import Scheme, SchemeCreate
from ..repositories.base import SchemeRepository
from ..seed import default_schemes
from ..utils.validators import generate_scheme_id

logger = logging.getLogger(__name__)


class SchemeService:
    """Create, look up and remove catalog schemes"""

    def __init__(self, schemes: SchemeRepository):
        self.schemes = schemes

    async def list_schemes(self) -> List[Scheme]:
        return await self.schemes.list_schemes()

    async def get_scheme(self, scheme_id: str) -> Scheme:
        scheme = await self.schemes.get_scheme(scheme_id)
        if scheme is None:
            raise SchemeNotFoundError(scheme_id)
        return scheme

    async def create_scheme(self, payload: SchemeCreate) -> Scheme:
        """
        Add a scheme to the catalog

        Raises:
            DuplicateSchemeError: a scheme with the same id exists
        """
        scheme_id = payload.id or generate_scheme_id(payload.name)
        if await self.schemes.get_scheme(scheme_id) is not None:
            raise DuplicateSchemeError(scheme_id)

        scheme = Scheme.model_validate({**payload.model_dump(), "id": scheme_id})
        await self.schemes.add_scheme(scheme)
        logger.info(f"Scheme created: {scheme_id}")
        if scheme.eligibility_criteria.is_unconstrained():
            logger.info(f"Scheme {scheme_id} has no eligibility criteria and matches every patient")
        return scheme

    async def delete_scheme(self, scheme_id: str) -> None:
        if not await self.schemes.delete_scheme(scheme_id):
            raise SchemeNotFoundError(scheme_id)
        logger.info(f"Scheme deleted: {scheme_id}")

    async def seed_defaults(self) -> int:
        """Load the default catalog into an empty store; returns schemes added"""
        if await self.schemes.list_schemes():
            return 0
        added = 0
        for scheme in default_schemes():
            await self.schemes.add_scheme(scheme)
            added += 1
        logger.info(f"Seeded {added} default schemes")
        return added
