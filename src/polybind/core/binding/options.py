# src/polybind/core/binding/options.py
"""
Opções do binder.

Define `BinderOptions`, a superfície de opções exposta aos colaboradores.
As opções afetam apenas o binder de propriedades, a checagem de chaves
desconhecidas e a política para identificadores de tipo não registrados;
nunca os algoritmos de containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..config.tree import ConfigNode

DEFAULT_TYPE_KEY = "_Type"


class UnknownTypeIdentifierPolicy(str, Enum):
    """
    Política para identificadores de tipo sem binder registrado.

    - ERROR: falha imediata com `UnknownTypeIdentifierError`
    - SKIP: o ponto de binding permanece intocado
    """
    ERROR = "error"
    SKIP = "skip"


_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def _flag(node: ConfigNode, key: str, default: bool) -> bool:
    raw = node.get(key)
    if raw is None or not raw.strip():
        return default
    text = raw.strip().casefold()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Valor booleano inválido em '{node.get_section(key).path}': {raw!r}")


@dataclass(frozen=True)
class BinderOptions:
    """
    Opções imutáveis de binding.

    Campos:
    - bind_non_public_properties: também preenche atributos/propriedades
      iniciados por "_"
    - error_on_unknown_configuration: modo estrito; chaves sem destino
      falham e falhas de itens de coleção são propagadas
    - type_key: nome da chave discriminadora dentro de um nó
    - unknown_type_identifier: política para identificadores não registrados
    - converters: conversores extras `tipo -> fn(texto)` para escalares
    """

    bind_non_public_properties: bool = False
    error_on_unknown_configuration: bool = False
    type_key: str = DEFAULT_TYPE_KEY
    unknown_type_identifier: UnknownTypeIdentifierPolicy = UnknownTypeIdentifierPolicy.ERROR
    converters: Mapping[Any, Callable[[str], Any]] = field(default_factory=dict)

    @classmethod
    def from_config(
        cls,
        node: ConfigNode,
        *,
        converters: Optional[Mapping[Any, Callable[[str], Any]]] = None,
    ) -> "BinderOptions":
        """
        Lê opções de uma seção de configuração (chaves case-insensitive).

        Chaves reconhecidas:
            BindNonPublicProperties, ErrorOnUnknownConfiguration,
            TypeKey, UnknownTypeIdentifier ("error" | "skip")
        """
        policy_raw = (node.get("UnknownTypeIdentifier") or "").strip()
        policy = (
            UnknownTypeIdentifierPolicy(policy_raw.casefold())
            if policy_raw
            else UnknownTypeIdentifierPolicy.ERROR
        )
        type_key = (node.get("TypeKey") or "").strip() or DEFAULT_TYPE_KEY
        return cls(
            bind_non_public_properties=_flag(node, "BindNonPublicProperties", False),
            error_on_unknown_configuration=_flag(node, "ErrorOnUnknownConfiguration", False),
            type_key=type_key,
            unknown_type_identifier=policy,
            converters=dict(converters or {}),
        )
