# src/polybind/core/config/__init__.py
"""
Camada de fontes de configuração do Polybind.

Este pacote contém a árvore de configuração (`ConfigNode`) consumida pelo
engine de binding e os utilitários que a produzem a partir de arquivos
YAML/JSON e variáveis de ambiente.

Responsabilidades do pacote:
    - Representação imutável e ordenada da árvore de configuração
    - Carregamento de arquivos (defaults + overrides locais) e ambiente
    - Composição de fontes via deep-merge determinístico

Limites explícitos:
    - Não converte valores para tipos Python (responsabilidade do binding)
    - Não notifica mudanças nem recarrega automaticamente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config_tree, load_environ
from .merge import deep_merge
from .tree import ConfigNode, join_path

__all__ = [
    "ConfigError",
    "ConfigNode",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "deep_merge",
    "join_path",
    "load_config_tree",
    "load_environ",
]
