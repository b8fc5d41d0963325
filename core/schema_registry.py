# core/schema_registry.py
from typing import Dict, Iterable, List
from core.dimensions import DIMENSIONS
from core.schema import ClassificationSchema
from util.errors import UnknownDimension


class SchemaRegistry:
    """
    Read-only lookup of dimension schemas by field name, in registration order.
    """

    def __init__(self, schemas: Iterable[ClassificationSchema]) -> None:
        self._by_name: Dict[str, ClassificationSchema] = {}
        for s in schemas:
            if s.field_name in self._by_name:
                raise ValueError(f"duplicate dimension: {s.field_name}")
            self._by_name[s.field_name] = s

    def get(self, field_name: str) -> ClassificationSchema:
        try:
            return self._by_name[field_name]
        except KeyError:
            raise UnknownDimension(field_name) from None

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def all(self) -> List[ClassificationSchema]:
        return list(self._by_name.values())

    def names(self) -> List[str]:
        return list(self._by_name)


registry = SchemaRegistry(DIMENSIONS)


def get_schema(field_name: str) -> ClassificationSchema:
    return registry.get(field_name)


def all_schemas() -> List[ClassificationSchema]:
    return registry.all()
