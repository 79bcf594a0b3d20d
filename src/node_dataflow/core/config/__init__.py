# src/node_dataflow/core/config/__init__.py

"""
Camada de configuração do Node DataFlow.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar e identificar a configuração de uma execução.

Responsabilidades do pacote:
    - Carregamento do arquivo do operador (YAML/JSON) sobre defaults embutidos
    - Resolução via deep-merge determinístico
    - Interpretação tipada (Settings, RepositorySettings, CollectorConfig, ProcessorConfig)
    - Hash canônico para rastreabilidade

Invariantes:
    - A configuração resolvida é um dicionário puro (dict)
    - Conflitos estruturais e seções ausentes são tratados como erro fatal
"""
