"""
Acceso CRUD genérico sobre una colección de MongoDB.

Cada entidad (categorías, especies, animales) es una subclase que sólo
declara su colección, sus modelos y sus campos obligatorios. La base de
datos se inyecta en el constructor; el servicio no guarda estado entre
peticiones.
"""
import logging
from typing import Any, Dict, Generic, List, Type, TypeVar

from bson import ObjectId
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError

from ..query import QueryOptions
from ..schemas.common import DeleteResultOut, UpdateResultOut
from ..utils import rename_keys, to_id, to_object_id

logger = logging.getLogger(__name__)

OutT = TypeVar("OutT", bound=BaseModel)


class CollectionService(Generic[OutT]):
    collection_name: str
    singular: str
    plural: str
    out_model: Type[OutT]
    # campo de la API -> mensaje de error si falta o está vacío
    required_fields: Dict[str, str] = {}
    # campo de la API -> campo almacenado (se guarda como ObjectId)
    references: Dict[str, str] = {}
    ascending_by_default = False

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.collection_name]
        self._api_names = {stored: api for api, stored in self.references.items()}

    @property
    def label(self) -> str:
        return self.singular.capitalize()

    def options(self, sort_by=None, order=None, page=None, limit=None) -> QueryOptions:
        return QueryOptions.from_params(
            sort_by, order, page, limit, ascending_by_default=self.ascending_by_default
        )

    def _store_failure(self, action: str, exc: Exception) -> HTTPException:
        logger.error(f"Failed to {action}: {exc}", exc_info=True)
        return HTTPException(status_code=500, detail=f"Failed to {action}")

    def _decode(self, doc: Dict[str, Any]) -> OutT:
        try:
            # un campo suelto con el nombre de la API no pisa la referencia guardada
            stored = {k: v for k, v in to_id(doc).items() if k not in self.references}
            return self.out_model.model_validate(rename_keys(stored, self._api_names))
        except ValidationError as e:
            logger.error(f"Error decoding {self.singular} {doc.get('_id')}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to decode {self.plural}")

    async def list_all(self, options: QueryOptions) -> List[OutT]:
        try:
            cursor = options.apply_to_cursor(self.collection.find({}))
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise self._store_failure(f"fetch {self.plural}", e)
        # si un documento no se puede decodificar falla el listado completo
        return [self._decode(d) for d in docs]

    async def _find_one(self, query: Dict[str, Any]) -> OutT:
        try:
            doc = await self.collection.find_one(query)
        except PyMongoError as e:
            raise self._store_failure(f"retrieve {self.singular}", e)
        if not doc:
            raise HTTPException(status_code=404, detail=f"{self.label} not found")
        return self._decode(doc)

    async def get_by_id(self, id: str) -> OutT:
        return await self._find_one({"_id": to_object_id(id)})

    async def create(self, payload: BaseModel) -> OutT:
        data = payload.model_dump()
        for field, message in self.required_fields.items():
            if not data.get(field):
                raise HTTPException(status_code=400, detail=message)

        # el id siempre lo genera el servidor
        doc: Dict[str, Any] = {"_id": ObjectId(), **self._to_stored(data)}

        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise self._store_failure(f"create {self.singular}", e)
        logger.info(f"Created {self.singular} {doc['_id']}")
        return self._decode(doc)

    def _to_stored(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Nombres de la API -> campos almacenados; las referencias pasan a ObjectId."""
        out: Dict[str, Any] = {}
        for key, value in data.items():
            if key in self.references:
                out[self.references[key]] = to_object_id(value, key) if value is not None else None
            else:
                out[key] = value
        return out

    async def update_by_id(self, id: str, data: Dict[str, Any]) -> UpdateResultOut:
        """
        Actualización parcial: el cuerpo se aplica con ``$set`` sin lista de campos.
        Las referencias con nombre de la API (category_id, species_id) se guardan
        en su campo almacenado como ObjectId, igual que en ``create``.
        Que no coincida ningún documento no es un error (matched_count=0).
        """
        oid = to_object_id(id)
        if "_id" in data:
            raise HTTPException(status_code=400, detail="Field _id cannot be updated")

        try:
            if not data:
                # $set vacío: no se escribe nada, sólo se informa si existe
                found = await self.collection.find_one({"_id": oid}, {"_id": 1})
                return UpdateResultOut(matched_count=1 if found else 0, modified_count=0)
            result = await self.collection.update_one({"_id": oid}, {"$set": self._to_stored(data)})
        except PyMongoError as e:
            raise self._store_failure(f"update {self.singular}", e)

        upserted_id = result.upserted_id
        return UpdateResultOut(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_count=0 if upserted_id is None else 1,
            upserted_id=None if upserted_id is None else str(upserted_id),
        )

    async def delete_by_id(self, id: str) -> DeleteResultOut:
        oid = to_object_id(id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._store_failure(f"delete {self.singular}", e)
        if result.deleted_count:
            logger.info(f"Deleted {self.singular} {oid}")
        return DeleteResultOut(success=True)
