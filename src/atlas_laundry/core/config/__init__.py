# src/atlas_laundry/core/config/__init__.py

"""
Camada de configuração do Atlas Laundry.

Este pacote carrega, mescla e identifica a configuração do scheduler
(localização do store de jobs, diretório de artefatos e políticas de
registro de execução).

A configuração no Atlas Laundry é:
    - declarativa
    - determinística
    - separada da definição dos jobs (que vive no JobStore)

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico para os registros de execução

Limites explícitos:
    - Não persiste jobs
    - Não executa jobs
    - Não depende de UI ou CLI
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
]
