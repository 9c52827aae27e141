from pydantic import BaseModel, Field
from typing import Optional
from .common import Location

class SpeciesCreate(BaseModel):
    species_name: str = ""
    category_id: Optional[str] = Field(None, description="ObjectId de la categoría (no se comprueba que exista)")
    image: Optional[str] = None
    location: Optional[Location] = None

class SpeciesOut(BaseModel):
    id: str
    species_name: str
    category_id: Optional[str] = None
    image: Optional[str] = None
    location: Optional[Location] = None
