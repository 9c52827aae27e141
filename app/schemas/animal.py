from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .common import Location

class AnimalCreate(BaseModel):
    animal_name: str = ""
    species_id: Optional[str] = Field(None, description="ObjectId de la especie (no se comprueba que exista)")
    birthdate: Optional[datetime] = None
    image: Optional[str] = None
    location: Optional[Location] = None

class AnimalOut(BaseModel):
    id: str
    animal_name: str
    species_id: Optional[str] = None
    birthdate: Optional[datetime] = None
    image: Optional[str] = None
    location: Optional[Location] = None
