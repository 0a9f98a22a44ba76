# src/flowscript/core/config/errors.py
"""
Exceções canônicas da camada de configuração do flowscript.

As exceções aqui definidas representam violações estruturais da
configuração da sessão, e não erros de autoria de script.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de invocação de componente
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração da sessão.

    Permite captura genérica de erros de configuração, separando-os
    das falhas de registro e invocação de workflows.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"dsl": {"modules": true}}
        - override: {"dsl": "legacy"}

    Limites explícitos:
        - Não realiza coerção ou conversão de tipos
        - Não tenta resolver conflitos automaticamente
    """
