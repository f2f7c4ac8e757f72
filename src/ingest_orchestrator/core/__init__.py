# src/ingest_orchestrator/core/__init__.py
"""
Core do Ingest Orchestrator.

Reúne as responsabilidades independentes de domínio: configuração,
contratos de Stage, contexto de execução, Stage Gate, orquestração
e rastreabilidade.

Princípios fundamentais:
    - Execução estritamente sequencial, em ordem fixa
    - Nenhuma decisão silenciosa: skip e falha são sempre registrados
    - Colaboradores externos (HTTP, subprocess) são injetáveis

Limites explícitos:
    - Não conhece a URL do dataset nem o comando do job de particionamento
    - Não depende de CLI
"""
