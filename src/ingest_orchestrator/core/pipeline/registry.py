# src/ingest_orchestrator/core/pipeline/registry.py
"""
Registro estrutural de etapas.

O `StageRegistry` valida a unicidade dos nomes e preserva a ordem de
registro, que é a ordem total de execução da run. A validação ocorre
antes de qualquer etapa ser executada.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .stage import Stage


class DuplicateStageNameError(ValueError):
    """Duas etapas registradas com o mesmo nome."""


@dataclass
class StageRegistry:
    """
    Registro ordenado de etapas.

    Invariantes:
        - Cada `stage.name` é único no registry
        - `list()` reflete exatamente a ordem de registro
    """

    _stages: Dict[str, Stage] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, stage: Stage) -> None:
        name = getattr(stage, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("stage.name must be a non-empty string")

        if name in self._stages:
            raise DuplicateStageNameError(f"Duplicate stage name: {name}")

        self._stages[name] = stage
        self._order.append(name)

    def get(self, name: str) -> Stage:
        return self._stages[name]

    def list(self) -> List[Stage]:
        return [self._stages[n] for n in self._order]

    def __len__(self) -> int:
        return len(self._order)
