# src/polybind/core/binding/__init__.py
"""
# Binding Core — Polybind

Este pacote implementa o binding recursivo de uma árvore `ConfigNode`
para objetos tipados, com despacho polimórfico plugável.

## Componentes

- **descriptor**: `TypeDescriptor` em cache por tipo de destino
- **convert**: conversão de folhas textuais para escalares
- **point**: `BindingPoint` e o resultado tri-estado `BindOutcome`
- **registry**: `CustomBinder`, `TypeBinder` e `CustomBinderRegistry`
- **options**: `BinderOptions`
- **errors**: taxonomia de `BindingError`
- **engine**: `bind_instance`, `BindingContext` e a API pública

## Invariantes

- O registry é congelado antes do binding e nunca muda durante ele
- Nenhuma falha estrutural é silenciosa, exceto tipos de chave/elemento
  não suportados (registrados em debug)
"""

from .descriptor import (
    ConfigKey,
    StructuralKind,
    TypeDescriptor,
    binding_constructor,
    config_key,
    describe,
)
from .engine import (
    BindingContext,
    ConfigurationBinder,
    bind,
    bind_instance,
    get,
    get_value,
)
from .errors import (
    AbstractTypeWithoutIdentifierError,
    AmbiguousConstructorError,
    BindingError,
    CollectionItemBindingError,
    ConversionError,
    InstantiationError,
    MissingConstructorArgumentError,
    MissingConstructorParameterPropertyError,
    UnbindableParameterError,
    UnknownConfigurationKeyError,
    UnknownTypeIdentifierError,
)
from .options import DEFAULT_TYPE_KEY, BinderOptions, UnknownTypeIdentifierPolicy
from .point import BindingPoint, BindOutcome
from .registry import (
    CustomBinder,
    CustomBinderRegistry,
    DuplicateTypeIdentifierError,
    RegistryFrozenError,
    TypeBinder,
)

__all__ = [
    "AbstractTypeWithoutIdentifierError",
    "AmbiguousConstructorError",
    "BindOutcome",
    "BinderOptions",
    "BindingContext",
    "BindingError",
    "BindingPoint",
    "CollectionItemBindingError",
    "ConfigKey",
    "ConfigurationBinder",
    "ConversionError",
    "CustomBinder",
    "CustomBinderRegistry",
    "DEFAULT_TYPE_KEY",
    "DuplicateTypeIdentifierError",
    "InstantiationError",
    "MissingConstructorArgumentError",
    "MissingConstructorParameterPropertyError",
    "RegistryFrozenError",
    "StructuralKind",
    "TypeBinder",
    "TypeDescriptor",
    "UnbindableParameterError",
    "UnknownConfigurationKeyError",
    "UnknownTypeIdentifierError",
    "UnknownTypeIdentifierPolicy",
    "bind",
    "bind_instance",
    "binding_constructor",
    "config_key",
    "describe",
    "get",
    "get_value",
]
