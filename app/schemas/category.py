from pydantic import BaseModel

class CategoryCreate(BaseModel):
    category_name: str = ""

class CategoryOut(BaseModel):
    id: str
    category_name: str
