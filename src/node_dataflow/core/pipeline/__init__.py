# src/node_dataflow/core/pipeline/__init__.py
"""
# Pipeline Core (Node DataFlow)

Este pacote define os **contratos** e as **estruturas compartilhadas** de
uma execução: o fluxo de identificadores de uma fonte (collector) para um
ou mais passos de transformação (processors).

## Componentes

- **types**
  - `CollectorConfig`, `ProcessorConfig`: configuração imutável por invocação

- **work_queue**
  - `WorkQueue`: FIFO limitada compartilhada por produtores e consumidores
  - `ProcessedCounter`: contagem de transformações concluídas sem erro

- **components**
  - `NodeCollector`, `NodeProcessor` (Protocols)

- **context**
  - `RunContext`: fila, contador, executor, eventos e falhas da execução

- **registry**
  - `ComponentRegistry`: resolução por nome canônico

## Invariantes

- O tamanho da fila nunca excede a capacidade configurada
- O contador só incrementa após uma transformação sem erro
"""
