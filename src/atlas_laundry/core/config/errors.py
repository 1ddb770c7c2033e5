# src/atlas_laundry/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Laundry.

As exceções aqui definidas representam violações estruturais da
configuração do scheduler, e não falhas de execução de jobs.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de conector ou de persistência
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Atlas Laundry.

    Permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas estruturais e falhas de execução
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Sem defaults não existe configuração efetiva válida
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
        - base:     {"store": {"path": "jobs.yaml"}}
        - override: {"store": "jobs.json"}

    Limites explícitos:
        - Não realiza coerção ou conversão de tipos
        - Não tenta resolver conflitos automaticamente
    """
