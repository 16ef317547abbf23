# src/polybind/__init__.py
"""
Polybind — binding de configuração hierárquica para grafos de objetos tipados.

Este pacote raiz define o namespace público do Polybind, uma biblioteca
que materializa árvores de configuração textuais (YAML, JSON, variáveis de
ambiente) em objetos Python fortemente tipados, inclusive quando o tipo
concreto de um nó só é conhecido no momento do binding.

Princípios centrais:
    - A árvore de configuração é imutável; o binder apenas lê
    - O despacho polimórfico é explícito (identificador `_Type` ou chave de mapa)
    - Toda contradição estrutural vira uma exceção tipada com path

Arquitetura em alto nível:
    - core.config  → árvore `ConfigNode`, carregamento e merge de fontes
    - core.binding → descritores de tipo, registry de binders e engine
    - core.options → catálogo nomeado de opções para colaboradores

Limites explícitos:
    - Não serializa objetos de volta para configuração
    - Não valida esquemas nem regras de negócio
    - Não monitora mudanças nas fontes
"""

from .core.binding import (
    BinderOptions,
    BindingContext,
    BindingError,
    ConfigKey,
    ConfigurationBinder,
    CustomBinder,
    CustomBinderRegistry,
    TypeBinder,
    bind,
    binding_constructor,
    config_key,
    get,
    get_value,
)
from .core.config import ConfigNode, load_config_tree
from .core.options import OptionsCatalog

__all__ = [
    "BinderOptions",
    "BindingContext",
    "BindingError",
    "ConfigKey",
    "ConfigNode",
    "ConfigurationBinder",
    "CustomBinder",
    "CustomBinderRegistry",
    "OptionsCatalog",
    "TypeBinder",
    "bind",
    "binding_constructor",
    "config_key",
    "get",
    "get_value",
    "load_config_tree",
]
