# app/utils.py
from typing import Any, Dict, Optional
from bson import ObjectId
from datetime import datetime
from fastapi import HTTPException

def to_id(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte _id -> id (str) y todos los ObjectIds a strings.
    También convierte datetime a ISO format strings.
    Si doc es None, devuelve {}.
    Se usa para los documentos "sueltos" del listado de animales (join).
    """
    if doc is None:
        return {}
    d = dict(doc)

    if "_id" in d:
        d["id"] = str(d.pop("_id"))

    for key, value in d.items():
        if isinstance(value, ObjectId):
            d[key] = str(value)
        elif isinstance(value, datetime):
            d[key] = value.isoformat()
        elif isinstance(value, dict):
            # subdocumentos: species, species.category, location
            d[key] = to_id(value)
        elif isinstance(value, list):
            d[key] = [
                str(item) if isinstance(item, ObjectId)
                else item.isoformat() if isinstance(item, datetime)
                else to_id(item) if isinstance(item, dict)
                else item
                for item in value
            ]

    return d

def rename_keys(doc: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    """Renombra claves de almacenamiento a nombres de la API (p.ej. category -> category_id)."""
    return {mapping.get(k, k): v for k, v in doc.items()}

def to_object_id(value: Any, field_name: str = "id") -> ObjectId:
    """
    Convierte un string a ObjectId con validación.
    Centraliza la lógica de conversión para evitar duplicación.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail=f"Invalid {field_name}")
    return ObjectId(value)
