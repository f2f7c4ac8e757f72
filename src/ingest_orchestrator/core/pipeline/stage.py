# src/ingest_orchestrator/core/pipeline/stage.py
"""
Descritor canônico de uma etapa do pipeline.

Uma etapa é a menor unidade executável: um nome estável, a localização
de saída que prova sua conclusão e o runner que a produz.

Princípios fundamentais:
    - Etapas não conhecem o Orchestrator nem as demais etapas
    - Etapas não decidem se devem rodar: o Stage Gate decide
    - O runner recebe apenas o RunContext

Invariantes:
    - `name` é único na run
    - `run` é chamado no máximo uma vez por run
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .context import RunContext
from .types import OutputKind

StageRunner = Callable[[RunContext], None]


@dataclass(frozen=True)
class Stage:
    """
    Etapa ordenada do pipeline.

    Atributos:
        - name: identificador estável ("fetch", "extract", "partition")
        - output: localização cuja presença marca a etapa como concluída
        - output_kind: regra do Stage Gate para `output`
        - runner: ação executada quando a saída está ausente
        - description: texto curto usado nos logs
    """
    name: str
    output: Path
    output_kind: OutputKind
    runner: StageRunner
    description: str = ""

    def run(self, ctx: RunContext) -> None:
        self.runner(ctx)
