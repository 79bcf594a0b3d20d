# src/node_dataflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Node DataFlow.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, validação estrutural e interpretação da configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de configuração são fatais e ocorrem antes de qualquer trabalho
    - Mensagens de erro são claras e direcionadas ao operador

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de processamento de node
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Node DataFlow.

    Permite captura genérica na CLI (saída com código de erro) e distinção
    clara entre falhas de configuração e falhas de execução.
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração informado na CLI
    não é encontrado.

    Limites explícitos:
        - Não tenta inferir ou criar configuração automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`), ou quando o arquivo não é parseável.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge
    entre os defaults embutidos e o arquivo do operador.

    Exemplo de conflito:
        - defaults: {"application": {"stats": {"enabled": false}}}
        - arquivo:  {"application": {"stats": "on"}}
    """


class MissingConfigSectionError(ConfigError):
    """
    Exceção levantada quando uma seção obrigatória (`collector`, `processor`)
    ou seu `name` está ausente.
    """


class InvalidConfigValueError(ConfigError):
    """
    Exceção levantada quando um knob de execução possui valor inválido
    (ex.: `consumer-threads: 0`, `consumer-exit: sometimes`).
    """
