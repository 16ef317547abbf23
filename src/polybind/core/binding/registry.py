# src/polybind/core/binding/registry.py
"""
Registro de binders customizados para despacho polimórfico.

Este módulo define o `CustomBinderRegistry`, responsável por mapear
identificadores de tipo (valor de `_Type` ou chave de mapa) para o
binder capaz de construir, ou re-popular, a instância concreta.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada binder possua um identificador válido
    - não existam identificadores duplicados
    - o conteúdo não mude depois de entregue ao engine

Responsabilidades do módulo:
    - Definir o protocolo `CustomBinder`
    - Oferecer `TypeBinder`, a implementação padrão identificador → classe
    - Validar unicidade e preservar a ordem de registro

Decisões arquiteturais:
    - O registry é construído uma vez e congelado antes do binding
    - Identificadores são comparados exatamente como registrados
    - O binder recebe o `BindingContext` explicitamente, nunca por estado
      global, para que membros polimórficos aninhados usem o mesmo
      registry e as mesmas opções

Invariantes:
    - Cada identificador registrado é único
    - Um registry congelado é somente leitura

Limites explícitos:
    - Não descobre tipos automaticamente (sem varredura de módulos)
    - Não executa binding por conta própria
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

from ..config.tree import ConfigNode

if TYPE_CHECKING:
    from .engine import BindingContext

logger = logging.getLogger(__name__)


@runtime_checkable
class CustomBinder(Protocol):
    """
    Contrato de um binder customizado.

    `bind` segue o contrato construct-or-rebind: quando `existing` não é
    None, o binder deve re-popular essa instância (ou devolver uma cópia
    modificada); caso contrário, constrói uma nova.
    """

    type_identifier: str

    def bind(self, node: ConfigNode, existing: Any, context: "BindingContext") -> Any:
        ...


@dataclass(frozen=True)
class TypeBinder:
    """Binder padrão: identificador → classe concreta, com binding recursivo pelo engine."""

    type_identifier: str
    cls: type

    def bind(self, node: ConfigNode, existing: Any, context: "BindingContext") -> Any:
        if existing is not None and not isinstance(existing, self.cls):
            logger.debug(
                "instância existente %s não é %s; construindo nova",
                type(existing).__qualname__,
                self.cls.__qualname__,
            )
            existing = None
        return context.construct_or_rebind(self.cls, node, existing)


class DuplicateTypeIdentifierError(ValueError):
    """
    Exceção levantada quando dois binders usam o mesmo identificador de tipo.

    A duplicidade é tratada como erro fatal de configuração, detectado no
    momento do registro e antes de qualquer binding.
    """


class RegistryFrozenError(RuntimeError):
    """Tentativa de registrar binder depois que o registry foi congelado."""


@dataclass
class CustomBinderRegistry:
    """
    Registro canônico de binders customizados.

    Decisões arquiteturais:
        - A ordem de inserção é preservada separadamente
        - A estrutura interna não é exposta diretamente
        - `freeze()` é chamado pelo engine ao receber o registry

    Invariantes:
        - Cada `type_identifier` é único no registry
        - `get` nunca levanta exceção para identificador ausente
    """

    _binders: Dict[str, CustomBinder] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    @classmethod
    def build(cls, binders: Iterable[CustomBinder]) -> "CustomBinderRegistry":
        registry = cls()
        for binder in binders:
            registry.add(binder)
        return registry.freeze()

    @classmethod
    def of_types(cls, types: Mapping[str, type]) -> "CustomBinderRegistry":
        """Atalho: `{"derived1": Derived1, ...}` → registry congelado de `TypeBinder`s."""
        return cls.build(TypeBinder(identifier, klass) for identifier, klass in types.items())

    def add(self, binder: CustomBinder) -> None:
        if self._frozen:
            raise RegistryFrozenError("registry is frozen; binders must be added before binding")

        identifier = getattr(binder, "type_identifier", None)
        if not isinstance(identifier, str) or not identifier.strip():
            raise ValueError("binder.type_identifier must be a non-empty string")

        if identifier in self._binders:
            raise DuplicateTypeIdentifierError(f"Duplicate type identifier: {identifier}")

        self._binders[identifier] = binder
        self._order.append(identifier)

    def get(self, identifier: str) -> Optional[CustomBinder]:
        return self._binders.get(identifier)

    def identifiers(self) -> List[str]:
        return list(self._order)

    def freeze(self) -> "CustomBinderRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._binders

    def __len__(self) -> int:
        return len(self._order)
