from pydantic import BaseModel
from typing import Any, Optional, Tuple

class Location(BaseModel):
    # latitude/longitude y coordinates se guardan tal cual llegan, sin derivar uno del otro
    type: str
    latitude: float
    longitude: float
    coordinates: Tuple[float, float]

class UpdateResultOut(BaseModel):
    matched_count: int
    modified_count: int
    upserted_count: int = 0
    upserted_id: Optional[Any] = None

class DeleteResultOut(BaseModel):
    success: bool = True
