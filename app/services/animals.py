"""
Animales: CRUD normal más el listado con join animal -> especie -> categoría.
"""
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from ..db import ANIMALS, CATEGORIES, SPECIES
from ..query import QueryOptions
from ..schemas.animal import AnimalOut
from ..utils import to_id
from .base import CollectionService


def build_animal_pipeline(options: QueryOptions) -> List[Dict[str, Any]]:
    """
    El orden de las etapas importa: sort y paginación van después del join,
    así que ordenan y cortan filas ya unidas (una por animal).
    """
    pipeline: List[Dict[str, Any]] = [
        {"$lookup": {
            "from": SPECIES,
            "localField": "species",
            "foreignField": "_id",
            "as": "species",
        }},
        {"$unwind": {"path": "$species", "preserveNullAndEmptyArrays": True}},
        {"$lookup": {
            "from": CATEGORIES,
            "localField": "species.category",
            "foreignField": "_id",
            "as": "species.category",
        }},
        {"$unwind": {"path": "$species.category", "preserveNullAndEmptyArrays": True}},
    ]
    pipeline.extend(options.pipeline_stages())
    return pipeline


def flatten_joined(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = to_id(doc)
    # sin especie, el segundo $lookup deja "species": {} -> se quita
    if out.get("species") == {}:
        out.pop("species")
    return out


class AnimalService(CollectionService[AnimalOut]):
    collection_name = ANIMALS
    singular = "animal"
    plural = "animals"
    out_model = AnimalOut
    required_fields = {
        "animal_name": "Animal name is required",
        "species_id": "Species ID is required",
    }
    references = {"species_id": "species"}
    ascending_by_default = True

    async def list_all(self, options: QueryOptions) -> List[Dict[str, Any]]:
        pipeline = build_animal_pipeline(options)
        try:
            docs = await self.collection.aggregate(pipeline).to_list(length=None)
        except PyMongoError as e:
            raise self._store_failure(f"fetch {self.plural}", e)
        return [flatten_joined(d) for d in docs]
