from ..db import CATEGORIES
from ..schemas.category import CategoryOut
from .base import CollectionService


class CategoryService(CollectionService[CategoryOut]):
    collection_name = CATEGORIES
    singular = "category"
    plural = "categories"
    out_model = CategoryOut
    required_fields = {"category_name": "Category name is required"}
