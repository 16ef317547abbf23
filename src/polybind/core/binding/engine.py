# src/polybind/core/binding/engine.py
"""
Engine de binding recursivo do Polybind.

Este módulo percorre uma árvore `ConfigNode` e materializa um grafo de
objetos tipados, inclusive grafos cujos tipos concretos só são conhecidos
no momento do binding (despacho polimórfico por identificador de tipo).

Ordem de prioridade em cada frame (`bind_instance`):
    1. Destino `ConfigNode`: o próprio nó é entregue (pass-through)
    2. Folha com valor e destino escalar: conversão e atribuição
    3. Nó com filhos: despacho estrutural (sequência, set, mapa, objeto)
    4. Nó vazio dentro de coleção: instância padrão/polimórfica
    5. Caso contrário: nada acontece

Responsabilidades do módulo:
    - Orquestrar a caminhada recursiva
    - Resolver identificadores de tipo e delegar ao registry
    - Construir instâncias (sem argumentos ou por binding de construtor)
    - Aplicar o modo estrito (chaves desconhecidas, falhas de itens)

Decisões arquiteturais:
    - Toda chamada recursiva devolve um `BindOutcome`; o chamador decide o
      write-back apenas a partir dele
    - O `BindingContext` (opções + registry congelado) é imutável e passado
      explicitamente; não há estado global durante o binding
    - Dataclasses congeladas são populadas por cópia (`dataclasses.replace`)
    - Após um binder customizado, os membros da instância não são
      re-populados pelo engine

Invariantes:
    - A árvore de configuração nunca é alterada
    - Qualquer `BindingError` fora de itens de coleção aborta o bind da raiz
    - Itens de coleção com falha só são descartados em modo leniente, e
      sempre com log de warning

Limites explícitos:
    - Não serializa objetos de volta para configuração
    - Não valida regras de negócio dos objetos produzidos
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import enum
import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Optional, Tuple

from ..config.tree import ConfigNode, join_path
from .convert import convert_value, is_scalar_target
from .descriptor import (
    Capability,
    ConstructorDescriptor,
    PropertyDescriptor,
    PropertyKind,
    StructuralKind,
    TypeDescriptor,
    describe,
)
from .errors import (
    AbstractTypeWithoutIdentifierError,
    AmbiguousConstructorError,
    BindingError,
    CollectionItemBindingError,
    InstantiationError,
    MissingConstructorArgumentError,
    MissingConstructorParameterPropertyError,
    UnbindableParameterError,
    UnknownConfigurationKeyError,
    UnknownTypeIdentifierError,
)
from .options import BinderOptions, UnknownTypeIdentifierPolicy
from .point import BindingPoint, BindOutcome
from .registry import CustomBinder, CustomBinderRegistry

logger = logging.getLogger(__name__)

_SKIPPED = object()
_NOTHING: FrozenSet[str] = frozenset()


# ---------------------------------------------------------------------------
# Contexto
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BindingContext:
    """
    Contexto imutável de uma operação de binding.

    Carrega as opções e o registry de binders customizados. É passado para
    cada frame recursivo e para os binders customizados, que o usam para
    popular membros aninhados com as mesmas regras.

    O registry recebido é congelado na construção do contexto.
    """

    options: BinderOptions = field(default_factory=BinderOptions)
    registry: CustomBinderRegistry = field(default_factory=CustomBinderRegistry)

    def __post_init__(self) -> None:
        self.registry.freeze()

    def get(self, node: ConfigNode, target: Any) -> Any:
        """Cria e popula um novo valor do tipo `target`; None se nada se aplicar."""
        point = BindingPoint()
        bind_instance(self, target, point, node)
        return point.value

    def bind(self, node: ConfigNode, instance: Any) -> Any:
        """Popula uma instância existente; devolve a instância (ou a cópia, se congelada)."""
        if instance is None:
            raise ValueError("instance must not be None")
        point = BindingPoint(instance)
        bind_instance(self, type(instance), point, node)
        return point.value

    def get_value(self, node: ConfigNode, target: Any, key: str, default: Any = None) -> Any:
        section = node.get_section(key)
        if section.value is None:
            return default
        value = self.get(section, target)
        return default if value is None else value

    def construct_or_rebind(self, cls: type, node: ConfigNode, existing: Any = None) -> Any:
        """
        Constrói `cls` (ou re-popula `existing`) sem resolver identificador de tipo.

        Ponto de entrada dos binders customizados: o identificador já foi
        resolvido pelo frame que os despachou.
        """
        desc = describe(cls)
        if existing is not None:
            return _bind_members(self, desc, existing, node)
        instance, bound = _construct(self, desc, node)
        return _bind_members(self, desc, instance, node, skip=bound)


# ---------------------------------------------------------------------------
# Entrada recursiva
# ---------------------------------------------------------------------------

def bind_instance(
    ctx: BindingContext,
    target: Any,
    point: BindingPoint,
    node: ConfigNode,
    is_parent_collection: bool = False,
    parent_key: Optional[str] = None,
) -> BindOutcome:
    """
    Frame recursivo do binding.

    Args:
        ctx: Contexto imutável (opções + registry).
        target: Anotação de destino.
        point: Slot que recebe o valor produzido.
        node: Nó de configuração correspondente.
        is_parent_collection: O frame é um item de coleção/mapa.
        parent_key: Chave do mapa pai (candidata a identificador de tipo).

    Returns:
        BindOutcome: Resultado explícito para a decisão de write-back.
    """
    desc = describe(target)

    if desc.kind is StructuralKind.RAW:
        point.try_set_value(node)
        return point.outcome

    if node.value is not None and is_scalar_target(desc, ctx.options):
        point.try_set_value(convert_value(desc, node.value, node.path, ctx.options))
        return point.outcome

    if node.has_children():
        if desc.kind is StructuralKind.SEQUENCE:
            return _bind_sequence(ctx, desc, point, node)
        if desc.kind is StructuralKind.SET:
            return _bind_set(ctx, desc, point, node)
        if desc.kind is StructuralKind.MAPPING:
            return _bind_mapping(ctx, desc, point, node)
        if desc.kind is StructuralKind.SCALAR:
            logger.debug("seção em %s não se aplica ao escalar %s", node.path, desc.name)
            return BindOutcome.UNTOUCHED
        return _bind_object(ctx, desc, point, node, parent_key)

    if is_parent_collection and not point.is_read_only:
        created = _create(ctx, desc, node, parent_key)
        if created is not _SKIPPED:
            point.set_value(created)
        return point.outcome

    return BindOutcome.UNTOUCHED


# ---------------------------------------------------------------------------
# Itens de containers
# ---------------------------------------------------------------------------

def _handle_item_failure(ctx: BindingContext, child: ConfigNode, exc: BindingError) -> None:
    if ctx.options.error_on_unknown_configuration:
        if isinstance(exc, CollectionItemBindingError):
            raise exc
        raise CollectionItemBindingError(
            message="Falha no binding de item de coleção",
            details={
                "path": child.path,
                "cause": type(exc).__name__,
                "reason": str(exc),
            },
        ) from exc
    logger.warning("item de configuração ignorado em %s: %s", child.path, exc)


def _bind_item(
    ctx: BindingContext,
    target: Any,
    child: ConfigNode,
    initial_value_provider: Optional[Callable[[], Any]] = None,
    parent_key: Optional[str] = None,
) -> Tuple[BindOutcome, Any]:
    point = BindingPoint(initial_value_provider=initial_value_provider)
    try:
        outcome = bind_instance(ctx, target, point, child, is_parent_collection=True, parent_key=parent_key)
    except BindingError as exc:
        _handle_item_failure(ctx, child, exc)
        return BindOutcome.UNTOUCHED, None
    return outcome, point.value if outcome.changed else None


def _iterable_items(value: Any) -> list:
    if value is None or isinstance(value, (str, bytes)) or not isinstance(value, cabc.Iterable):
        return []
    return list(value)


def _bind_sequence(ctx: BindingContext, desc: TypeDescriptor, point: BindingPoint, node: ConfigNode) -> BindOutcome:
    if point.is_read_only:
        logger.debug("sequência read-only em %s ignorada", node.path)
        return BindOutcome.UNTOUCHED

    items = _iterable_items(point.value)
    for child in node.get_children():
        outcome, value = _bind_item(ctx, desc.element_type, child)
        if outcome.changed:
            items.append(value)

    point.set_value(tuple(items))
    return point.outcome


def _bind_collection_items(ctx: BindingContext, element_type: Any, collection: Any, node: ConfigNode) -> None:
    add = getattr(collection, "append", None) or getattr(collection, "add")
    for child in node.get_children():
        outcome, value = _bind_item(ctx, element_type, child)
        if outcome.changed:
            add(value)


def _supports_set_element(element_type: Any) -> bool:
    element = describe(element_type)
    if element.kind is not StructuralKind.SCALAR or element.cls is None:
        return False
    return element.cls is str or issubclass(element.cls, enum.Enum)


def _bind_set(ctx: BindingContext, desc: TypeDescriptor, point: BindingPoint, node: ConfigNode) -> BindOutcome:
    if not _supports_set_element(desc.element_type):
        logger.debug("tipo de elemento de set não suportado em %s: %r", node.path, desc.element_type)
        return BindOutcome.UNTOUCHED

    current = point.value
    if point.is_read_only and current is None:
        return BindOutcome.UNTOUCHED

    if current is not None and not desc.is_read_only_view and isinstance(current, cabc.MutableSet):
        target = current
    else:
        target = set(_iterable_items(current))

    for child in node.get_children():
        outcome, value = _bind_item(ctx, desc.element_type, child)
        if outcome.changed:
            target.add(value)

    result = frozenset(target) if desc.cls is frozenset else target
    if result is current:
        point.mark_mutated()
    else:
        point.try_set_value(result)
    return point.outcome


def _supports_mapping_key(key_type: Any) -> bool:
    key = describe(key_type)
    if key.cls is None:
        # Any: chave textual
        return key.scalar
    if key.kind is not StructuralKind.SCALAR:
        return False
    if key.cls is str or issubclass(key.cls, enum.Enum):
        return True
    return issubclass(key.cls, int) and not issubclass(key.cls, bool)


def _bind_mapping_entries(
    ctx: BindingContext,
    key_type: Any,
    value_type: Any,
    mapping: Any,
    node: ConfigNode,
) -> None:
    key_desc = describe(key_type)
    for child in node.get_children():
        try:
            key = convert_value(key_desc, child.key, child.path, ctx.options)
        except BindingError as exc:
            _handle_item_failure(ctx, child, exc)
            continue

        outcome, value = _bind_item(
            ctx,
            value_type,
            child,
            initial_value_provider=functools.partial(mapping.get, key),
            parent_key=child.key,
        )
        if outcome.changed:
            mapping[key] = value


def _bind_mapping(ctx: BindingContext, desc: TypeDescriptor, point: BindingPoint, node: ConfigNode) -> BindOutcome:
    if not _supports_mapping_key(desc.key_type):
        logger.debug("tipo de chave de mapa não suportado em %s: %r", node.path, desc.key_type)
        return BindOutcome.UNTOUCHED

    current = point.value
    if point.is_read_only and current is None:
        return BindOutcome.UNTOUCHED

    if current is not None and not desc.is_read_only_view and isinstance(current, cabc.MutableMapping):
        target = current
    else:
        target = dict(current) if isinstance(current, cabc.Mapping) else {}

    _bind_mapping_entries(ctx, desc.key_type, desc.value_type, target, node)

    if target is current:
        point.mark_mutated()
    else:
        point.try_set_value(target)
    return point.outcome


# ---------------------------------------------------------------------------
# Objetos
# ---------------------------------------------------------------------------

def _bind_object(
    ctx: BindingContext,
    desc: TypeDescriptor,
    point: BindingPoint,
    node: ConfigNode,
    parent_key: Optional[str],
) -> BindOutcome:
    instance = point.value

    if instance is None:
        if point.is_read_only:
            return BindOutcome.UNTOUCHED
        created = _create(ctx, desc, node, parent_key)
        if created is not _SKIPPED:
            point.set_value(created)
        return point.outcome

    identifier, explicit = _resolve_identifier(ctx, node, parent_key)
    binder = ctx.registry.get(identifier) if identifier is not None else None
    if binder is not None:
        result = _invoke_binder(ctx, binder, desc, node, instance)
    elif explicit:
        # SKIP mantém a instância existente intocada
        _unknown_identifier(ctx, desc, node, identifier)
        return BindOutcome.UNTOUCHED
    else:
        result = _bind_members(ctx, desc, instance, node)

    if result is instance:
        point.mark_mutated()
    elif not point.try_set_value(result):
        logger.debug("cópia produzida em %s descartada: ponto read-only", node.path)
    return point.outcome


def _resolve_identifier(
    ctx: BindingContext,
    node: ConfigNode,
    parent_key: Optional[str],
) -> Tuple[Optional[str], bool]:
    discriminator = node.find(ctx.options.type_key)
    if discriminator is not None and discriminator.value and discriminator.value.strip():
        return discriminator.value.strip(), True
    if parent_key:
        return parent_key, False
    return None, False


def _unknown_identifier(ctx: BindingContext, desc: TypeDescriptor, node: ConfigNode, identifier: str) -> Any:
    """Aplica a política para identificador sem binder: levanta (ERROR) ou devolve `_SKIPPED`."""
    if ctx.options.unknown_type_identifier is UnknownTypeIdentifierPolicy.SKIP:
        logger.debug("identificador '%s' não registrado em %s; ignorado", identifier, node.path)
        return _SKIPPED
    raise UnknownTypeIdentifierError(
        message=f"Identificador de tipo não registrado: {identifier}",
        details={
            "path": node.path,
            "type_identifier": identifier,
            "target": desc.name,
            "registered": ctx.registry.identifiers(),
        },
        hint="Registre um binder para o identificador ou corrija o valor na configuração",
    )


def _default_scalar(desc: TypeDescriptor, node: ConfigNode) -> Any:
    """Valor padrão de um escalar para item vazio de coleção; `_SKIPPED` quando não há um."""
    if issubclass(desc.cls, enum.Flag):
        return desc.cls(0)
    if issubclass(desc.cls, enum.Enum):
        return next(iter(desc.cls))
    try:
        return desc.cls()
    except (TypeError, ValueError) as exc:
        logger.debug("item vazio em %s ignorado: %s sem valor padrão (%s)", node.path, desc.name, exc)
        return _SKIPPED


def _create(ctx: BindingContext, desc: TypeDescriptor, node: ConfigNode, parent_key: Optional[str]) -> Any:
    if desc.kind is StructuralKind.SCALAR:
        return _default_scalar(desc, node)

    identifier, explicit = _resolve_identifier(ctx, node, parent_key)

    if identifier is not None:
        binder = ctx.registry.get(identifier)
        if binder is not None:
            logger.debug("identificador '%s' despachado em %s", identifier, node.path or "<root>")
            return _invoke_binder(ctx, binder, desc, node, None)

        if explicit or desc.is_abstract:
            return _unknown_identifier(ctx, desc, node, identifier)

        logger.debug("chave '%s' não registrada como identificador em %s", identifier, node.path)

    instance, bound = _construct(ctx, desc, node)
    return _bind_members(ctx, desc, instance, node, skip=bound)


def _invoke_binder(
    ctx: BindingContext,
    binder: CustomBinder,
    desc: TypeDescriptor,
    node: ConfigNode,
    existing: Any,
) -> Any:
    try:
        result = binder.bind(node, existing, ctx)
    except BindingError:
        raise
    except Exception as exc:
        raise InstantiationError(
            message=f"Binder customizado '{binder.type_identifier}' falhou",
            details={
                "path": node.path,
                "type_identifier": binder.type_identifier,
                "reason": f"{type(exc).__name__}: {exc}",
            },
        ) from exc

    if result is None or not desc.accepts(result):
        raise InstantiationError(
            message=f"Binder customizado '{binder.type_identifier}' devolveu instância incompatível",
            details={
                "path": node.path,
                "type_identifier": binder.type_identifier,
                "expected": desc.name,
                "actual": type(result).__qualname__,
            },
        )
    return result


def _construct(ctx: BindingContext, desc: TypeDescriptor, node: ConfigNode) -> Tuple[Any, FrozenSet[str]]:
    """
    Instancia o destino sem identificador de tipo.

    Returns:
        A instância e os nomes (casefold) já populados pelo construtor.
    """
    if desc.kind is StructuralKind.SEQUENCE:
        return (), _NOTHING
    if desc.kind is StructuralKind.SET:
        return (frozenset() if desc.cls is frozenset else set()), _NOTHING
    if desc.kind is StructuralKind.MAPPING:
        return {}, _NOTHING

    if desc.is_abstract or desc.cls is None:
        raise AbstractTypeWithoutIdentifierError(
            message=f"Tipo abstrato sem identificador de tipo: {desc.name}",
            details={"path": node.path, "target": desc.name, "type_key": ctx.options.type_key},
            hint=f"Informe '{ctx.options.type_key}' na seção ou use um mapa com chaves registradas",
        )

    constructors = desc.constructors
    parameterless = [c for c in constructors if c.is_parameterless]
    if parameterless:
        return _invoke_constructor(desc, parameterless[0], {}, node), _NOTHING

    if len(constructors) > 1:
        raise AmbiguousConstructorError(
            message=f"Múltiplos construtores e nenhum sem parâmetros: {desc.name}",
            details={
                "path": node.path,
                "target": desc.name,
                "constructors": [c.name for c in constructors],
            },
        )

    return _construct_with_parameters(ctx, desc, constructors[0], node)


def _construct_with_parameters(
    ctx: BindingContext,
    desc: TypeDescriptor,
    ctor: ConstructorDescriptor,
    node: ConfigNode,
) -> Tuple[Any, FrozenSet[str]]:
    parameters = [p for p in ctor.parameters if not p.variadic]
    for param in parameters:
        if not param.bindable_by_name:
            raise UnbindableParameterError(
                message=f"Parâmetro '{param.name}' de {desc.name} não pode ser preenchido por nome",
                details={"path": node.path, "target": desc.name, "parameter": param.name, "kind": param.kind.name},
            )

    properties = {prop.name.casefold(): prop for prop in desc.properties}
    missing = [p.name for p in parameters if p.name.casefold() not in properties]
    if missing:
        raise MissingConstructorParameterPropertyError(
            message=f"Parâmetros de construtor sem propriedade correspondente em {desc.name}",
            details={"path": node.path, "target": desc.name, "parameters": missing},
        )

    kwargs = {}
    for param in parameters:
        prop = properties[param.name.casefold()]
        section = node.get_section(prop.config_key)
        annotation = prop.annotation if param.annotation is Any else param.annotation

        point = BindingPoint()
        outcome = bind_instance(ctx, annotation, point, section)
        if outcome.changed:
            kwargs[param.name] = point.value
        elif not param.has_default:
            raise MissingConstructorArgumentError(
                message=f"Sem valor para o parâmetro obrigatório '{param.name}' de {desc.name}",
                details={"path": section.path, "target": desc.name, "parameter": param.name},
            )

    instance = _invoke_constructor(desc, ctor, kwargs, node)
    return instance, frozenset(properties[p.name.casefold()].name.casefold() for p in parameters)


def _invoke_constructor(
    desc: TypeDescriptor,
    ctor: ConstructorDescriptor,
    kwargs: dict,
    node: ConfigNode,
) -> Any:
    try:
        return ctor.invoke(desc.cls, kwargs)
    except BindingError:
        raise
    except Exception as exc:
        raise InstantiationError(
            message=f"Falha ao instanciar {desc.name}",
            details={
                "path": node.path,
                "target": desc.name,
                "constructor": ctor.name,
                "reason": f"{type(exc).__name__}: {exc}",
            },
        ) from exc


def _bind_members(
    ctx: BindingContext,
    declared: TypeDescriptor,
    instance: Any,
    node: ConfigNode,
    skip: FrozenSet[str] = _NOTHING,
) -> Any:
    """Popula a instância conforme sua capacidade; devolve a instância ou sua cópia."""
    if declared.cls is not None and (
        type(instance) is declared.cls
        or (declared.capability is not Capability.NONE and isinstance(instance, declared.cls))
    ):
        desc = declared
    else:
        desc = describe(type(instance))

    if desc.kind is not StructuralKind.OBJECT:
        return instance

    if desc.capability is Capability.DICTIONARY:
        if _supports_mapping_key(desc.key_type):
            _bind_mapping_entries(ctx, desc.key_type, desc.value_type, instance, node)
        else:
            logger.debug("tipo de chave de mapa não suportado em %s: %r", node.path, desc.key_type)
        return instance

    if desc.capability is Capability.COLLECTION:
        _bind_collection_items(ctx, desc.element_type, instance, node)
        return instance

    if ctx.options.error_on_unknown_configuration:
        _check_unknown_keys(ctx, desc, node)

    if desc.is_frozen:
        return _bind_frozen(ctx, desc, instance, node, skip)

    _bind_properties(ctx, desc, instance, node, skip)
    return instance


# ---------------------------------------------------------------------------
# Propriedades
# ---------------------------------------------------------------------------

def _is_bindable(prop: PropertyDescriptor, options: BinderOptions, skip: FrozenSet[str]) -> bool:
    if not prop.has_getter or prop.name.casefold() in skip:
        return False
    return prop.is_public or options.bind_non_public_properties


def _check_unknown_keys(ctx: BindingContext, desc: TypeDescriptor, node: ConfigNode) -> None:
    known = {ctx.options.type_key.casefold()}
    for prop in desc.properties:
        if not _is_bindable(prop, ctx.options, _NOTHING):
            continue
        known.add(prop.name.casefold())
        known.add(prop.config_key.casefold())

    unknown = [child.key for child in node.get_children() if child.key.casefold() not in known]
    if unknown:
        raise UnknownConfigurationKeyError(
            message=f"Chaves de configuração sem destino em {desc.name}: {', '.join(unknown)}",
            details={"path": node.path, "target": desc.name, "keys": unknown},
            hint="Remova as chaves ou desative error_on_unknown_configuration",
        )


def _bind_properties(
    ctx: BindingContext,
    desc: TypeDescriptor,
    instance: Any,
    node: ConfigNode,
    skip: FrozenSet[str],
) -> None:
    for prop in desc.properties:
        if not _is_bindable(prop, ctx.options, skip):
            continue

        point = BindingPoint(
            initial_value_provider=functools.partial(prop.get, instance),
            is_read_only=not prop.has_setter,
        )
        bind_instance(ctx, prop.annotation, point, node.get_section(prop.config_key))

        if point.is_read_only or point.value is None:
            continue
        try:
            prop.set(instance, point.value)
        except (AttributeError, TypeError, ValueError) as exc:
            raise BindingError(
                message=f"Falha ao atribuir '{prop.name}' em {desc.name}",
                details={
                    "path": join_path(node.path, prop.config_key),
                    "target": desc.name,
                    "reason": f"{type(exc).__name__}: {exc}",
                },
            ) from exc


def _bind_frozen(
    ctx: BindingContext,
    desc: TypeDescriptor,
    instance: Any,
    node: ConfigNode,
    skip: FrozenSet[str],
) -> Any:
    changes = {}
    for prop in desc.properties:
        if prop.kind is not PropertyKind.ATTRIBUTE or not prop.init:
            continue
        if not _is_bindable(prop, ctx.options, skip):
            continue

        point = BindingPoint(initial_value_provider=functools.partial(prop.get, instance))
        outcome = bind_instance(ctx, prop.annotation, point, node.get_section(prop.config_key))
        if outcome.changed and point.value is not None:
            changes[prop.name] = point.value

    if not changes:
        return instance
    try:
        return dataclasses.replace(instance, **changes)
    except (TypeError, ValueError) as exc:
        raise InstantiationError(
            message=f"Falha ao copiar {desc.name} com os valores da configuração",
            details={"path": node.path, "target": desc.name, "reason": f"{type(exc).__name__}: {exc}"},
        ) from exc


# ---------------------------------------------------------------------------
# API pública
# ---------------------------------------------------------------------------

def _context(
    registry: Optional[CustomBinderRegistry],
    options: Optional[BinderOptions],
) -> BindingContext:
    return BindingContext(
        options=options if options is not None else BinderOptions(),
        registry=registry if registry is not None else CustomBinderRegistry(),
    )


def bind(
    node: ConfigNode,
    instance: Any,
    *,
    registry: Optional[CustomBinderRegistry] = None,
    options: Optional[BinderOptions] = None,
) -> Any:
    """Popula `instance` com a árvore `node`; devolve a instância (ou cópia congelada)."""
    return _context(registry, options).bind(node, instance)


def get(
    node: ConfigNode,
    target: Any,
    *,
    registry: Optional[CustomBinderRegistry] = None,
    options: Optional[BinderOptions] = None,
) -> Any:
    """Cria e popula um valor do tipo `target`; None quando nada se aplica."""
    return _context(registry, options).get(node, target)


def get_value(
    node: ConfigNode,
    target: Any,
    key: str,
    default: Any = None,
    *,
    registry: Optional[CustomBinderRegistry] = None,
    options: Optional[BinderOptions] = None,
) -> Any:
    """Converte o valor do filho `key`; `default` quando ausente."""
    return _context(registry, options).get_value(node, target, key, default)


class ConfigurationBinder:
    """
    Fachada de binding com contexto fixo.

    Mantém um `BindingContext` imutável e expõe `bind`, `get` e
    `get_value` sem exigir registry/opções a cada chamada.
    """

    def __init__(
        self,
        registry: Optional[CustomBinderRegistry] = None,
        options: Optional[BinderOptions] = None,
    ) -> None:
        self.context = _context(registry, options)

    @property
    def options(self) -> BinderOptions:
        return self.context.options

    @property
    def registry(self) -> CustomBinderRegistry:
        return self.context.registry

    def bind(self, node: ConfigNode, instance: Any) -> Any:
        return self.context.bind(node, instance)

    def get(self, node: ConfigNode, target: Any) -> Any:
        return self.context.get(node, target)

    def get_value(self, node: ConfigNode, target: Any, key: str, default: Any = None) -> Any:
        return self.context.get_value(node, target, key, default)
