"""
Opciones de listado a partir de los query params (sort_by, order, page, limit).

Los valores llegan como strings sin validar. Un número ilegible cuenta como 0,
así que ``page=abc`` simplemente desactiva la paginación.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

ASCENDING = 1
DESCENDING = -1


def parse_int(raw: Optional[str]) -> int:
    if raw is None:
        return 0
    try:
        return int(str(raw).strip())
    except ValueError:
        return 0


@dataclass
class QueryOptions:
    sort: List[Tuple[str, int]] = field(default_factory=list)
    skip: Optional[int] = None
    limit: Optional[int] = None

    @property
    def paginated(self) -> bool:
        return self.skip is not None and self.limit is not None

    @classmethod
    def from_params(
        cls,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        ascending_by_default: bool = False,
    ) -> "QueryOptions":
        """
        Categorías y especies ordenan descendente por defecto y sólo
        ``order=asc`` lo invierte; animales ordenan ascendente y sólo
        ``order=desc`` lo invierte.
        """
        opts = cls()

        if sort_by:
            if ascending_by_default:
                direction = DESCENDING if order == "desc" else ASCENDING
            else:
                direction = ASCENDING if order == "asc" else DESCENDING
            opts.sort = [(sort_by, direction)]

        page_n = parse_int(page)
        limit_n = parse_int(limit)
        if page_n > 0 and limit_n > 0:
            opts.skip = (page_n - 1) * limit_n
            opts.limit = limit_n

        return opts

    def apply_to_cursor(self, cursor):
        """Aplica sort/skip/limit a un cursor de ``find``."""
        if self.sort:
            cursor = cursor.sort(self.sort)
        if self.paginated:
            cursor = cursor.skip(self.skip).limit(self.limit)
        return cursor

    def pipeline_stages(self) -> List[Dict[str, Any]]:
        """Etapas $sort / $skip / $limit para el final de un pipeline de agregación."""
        stages: List[Dict[str, Any]] = []
        if self.sort:
            stages.append({"$sort": dict(self.sort)})
        if self.paginated:
            stages.append({"$skip": self.skip})
            stages.append({"$limit": self.limit})
        return stages
