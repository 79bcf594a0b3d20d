# src/node_dataflow/__init__.py
"""
Node DataFlow: ETL em lote para nodes de um repositório documental.

Um fluxo de identificadores de nodes sai de uma fonte (collector), passa
por uma fila limitada e é consumido por N workers que aplicam uma ou mais
transformações (processors), sob um guard de read-only global ou por passo.

Arquitetura em alto nível:
    - core.config      → carregamento, merge, hashing e interpretação da configuração
    - core.pipeline    → fila, contador, contexto de execução, contratos e registry
    - core.repository  → capability do repositório, guard de read-only, cliente REST
    - core.engine      → orquestração produtor/consumidor e montagem do registry
    - collectors       → fontes de identificadores
    - processors       → transformações por node
    - normalization    → interpretador da cadeia de operações de metadados
    - cli              → ponto de entrada (typer)

Limites explícitos:
    - Execução em um único host, sem fila durável
    - Sem retry automático nem consistência transacional entre nodes
"""

__version__ = "0.1.0"
