# src/polybind/core/binding/point.py
"""
Ponto de binding e resultado tri-estado.

Este módulo define a abstração de "onde o valor produzido vai parar"
durante a caminhada recursiva, desacoplando a lógica de binding do
armazenamento concreto (propriedade, item de coleção, valor de mapa,
argumento de construtor).

Componentes:
    - BindOutcome  → resultado explícito de cada chamada recursiva
    - BindingPoint → slot de valor com leitura preguiçosa e flag read-only

Decisões arquiteturais:
    - O valor inicial é lido no máximo uma vez (provider preguiçoso)
    - Cada frame recursivo possui seu próprio BindingPoint; nunca é
      compartilhado
    - A decisão de write-back do chamador usa apenas `outcome`; não há
      heurística implícita de "tipo valor significa sujo"

Invariantes:
    - Um ponto read-only nunca recebe valor novo
    - `set_value` ocorre no máximo uma vez por ponto
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional

_MISSING = object()


class BindOutcome(str, Enum):
    """
    Resultado de uma chamada recursiva de binding.

    - UNTOUCHED: nada aplicável foi encontrado; o valor atual permanece
    - REPLACED: um valor novo foi atribuído ao ponto
    - MUTATED_IN_PLACE: a instância existente foi alterada sem realocação
    """
    UNTOUCHED = "untouched"
    REPLACED = "replaced"
    MUTATED_IN_PLACE = "mutated_in_place"

    @property
    def changed(self) -> bool:
        return self is not BindOutcome.UNTOUCHED


class BindingPoint:
    """Slot de valor manipulado por um único frame da caminhada recursiva."""

    __slots__ = ("_provider", "_initial", "_new_value", "_value_set", "_mutated", "is_read_only")

    def __init__(
        self,
        initial_value: Any = None,
        *,
        initial_value_provider: Optional[Callable[[], Any]] = None,
        is_read_only: bool = False,
    ) -> None:
        self._provider = initial_value_provider
        self._initial = _MISSING if initial_value_provider is not None else initial_value
        self._new_value: Any = None
        self._value_set = False
        self._mutated = False
        self.is_read_only = is_read_only

    @property
    def value(self) -> Any:
        if self._value_set:
            return self._new_value
        if self._initial is _MISSING:
            provider = self._provider
            self._provider = None
            self._initial = provider() if provider is not None else None
        return self._initial

    @property
    def has_new_value(self) -> bool:
        return not self.is_read_only and self._value_set

    @property
    def outcome(self) -> BindOutcome:
        if self.has_new_value:
            return BindOutcome.REPLACED
        if self._mutated:
            return BindOutcome.MUTATED_IN_PLACE
        return BindOutcome.UNTOUCHED

    def set_value(self, new_value: Any) -> None:
        if self.is_read_only:
            raise RuntimeError("BindingPoint read-only não aceita valor novo")
        if self._value_set:
            raise RuntimeError("BindingPoint já recebeu um valor novo")
        self._new_value = new_value
        self._value_set = True

    def try_set_value(self, new_value: Any) -> bool:
        if self.is_read_only:
            return False
        self.set_value(new_value)
        return True

    def mark_mutated(self) -> None:
        self._mutated = True
