"""
Polybind — Canonical Binding Exceptions

Este módulo define as exceções tipadas levantadas pelo engine de binding.

Objetivo:
- Expressar cada contradição estrutural entre árvore e tipo de destino
  com uma classe própria
- Carregar dados estruturados (`details`) com o path do nó envolvido
- Permitir conversão para payload serializável (`to_payload`)

Regras:
- "Chave não encontrada" nunca é erro: o binder apenas não produz valor
- Qualquer exceção daqui aborta o bind inteiro da raiz (sem resultado parcial)
- Tipos de chave/elemento não suportados em sets e mapas NÃO são erro:
  são ignorados silenciosamente (registrado em log de debug)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class BindingError(Exception):
    """Base class para falhas de binding.

    Importante:
    - `details` sempre inclui `path` quando há um nó envolvido
    - Mensagem curta e humana; o diagnóstico vai em `details`
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        path = self.details.get("path")
        if path:
            return f"{self.message} (path: {path})"
        return self.message

    @property
    def path(self) -> Optional[str]:
        return self.details.get("path")

    def to_payload(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        payload = asdict(self)
        payload["type"] = self.__class__.__name__
        return payload


# ---------------------------------------------------------------------------
# Conversão escalar
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConversionError(BindingError):
    """Valor textual de uma folha não converte para o tipo escalar de destino."""


# ---------------------------------------------------------------------------
# Construção de instâncias
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class AmbiguousConstructorError(BindingError):
    """Mais de um construtor disponível e nenhum aceita zero argumentos."""


@dataclass(eq=False)
class MissingConstructorParameterPropertyError(BindingError):
    """Parâmetro de construtor sem propriedade de mesmo nome no tipo."""


@dataclass(eq=False)
class UnbindableParameterError(BindingError):
    """Parâmetro que não pode ser preenchido por nome (*args, **kwargs, posicional-only)."""


@dataclass(eq=False)
class MissingConstructorArgumentError(BindingError):
    """Parâmetro obrigatório sem seção correspondente e sem default."""


@dataclass(eq=False)
class InstantiationError(BindingError):
    """Construtor (ou binder customizado) falhou ou devolveu tipo incompatível."""


# ---------------------------------------------------------------------------
# Polimorfismo
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class AbstractTypeWithoutIdentifierError(BindingError):
    """Destino abstrato/Protocol/Union sem identificador de tipo na configuração."""


@dataclass(eq=False)
class UnknownTypeIdentifierError(BindingError):
    """Identificador de tipo sem binder registrado."""


# ---------------------------------------------------------------------------
# Modo estrito
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnknownConfigurationKeyError(BindingError):
    """Chaves da configuração sem destino correspondente (modo estrito)."""


@dataclass(eq=False)
class CollectionItemBindingError(BindingError):
    """Falha ao fazer binding de um item de coleção/mapa (modo estrito)."""
