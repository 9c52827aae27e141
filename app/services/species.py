from ..db import SPECIES
from ..schemas.species import SpeciesOut
from .base import CollectionService


class SpeciesService(CollectionService[SpeciesOut]):
    collection_name = SPECIES
    singular = "species"
    plural = "species"
    out_model = SpeciesOut
    required_fields = {
        "species_name": "Species name is required",
        "category_id": "Category ID is required",
    }
    references = {"category_id": "category"}

    async def get_by_name(self, name: str) -> SpeciesOut:
        """Búsqueda exacta por ``species_name``; sin paginación."""
        return await self._find_one({"species_name": name})
