"""
Model registry owned by an ORM instance.
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

if TYPE_CHECKING:
    from clickhouse_orm.model.model import Model

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Name -> model lookup, in definition order."""

    def __init__(self):
        self._models: Dict[str, "Model"] = {}

    def register(self, model: "Model") -> "Model":
        if model.name in self._models:
            logger.debug("Replacing model definition %s", model.name)
        self._models[model.name] = model
        return model

    def get(self, name: str) -> Optional["Model"]:
        return self._models.get(name)

    def all(self) -> List["Model"]:
        return list(self._models.values())

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator["Model"]:
        return iter(list(self._models.values()))

    def __len__(self) -> int:
        return len(self._models)
