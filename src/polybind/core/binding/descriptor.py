# src/polybind/core/binding/descriptor.py
"""
Descritor de tipo de destino do binding.

Este módulo implementa a reflexão sobre tipos de destino, calculada uma
única vez por tipo e mantida em cache, para que o engine decida o
comportamento estrutural sem reinspecionar anotações a cada chamada.

Um `TypeDescriptor` informa:
    - o tipo estrutural (RAW, SCALAR, SEQUENCE, SET, MAPPING, OBJECT)
    - tipos de elemento, chave e valor para containers
    - se o destino é abstrato (ABC, Protocol ou Union sem identificador)
    - capacidades de coleção/dicionário de classes concretas
    - construtores e propriedades vinculáveis

Mapeamento estrutural:
    - RAW      → `ConfigNode` (o próprio nó é entregue, sem binding)
    - SCALAR   → str, int, float, bool, Decimal, Enum, UUID, bytes,
                 datetime/date/time/timedelta, Path, classes com
                 `from_config_value`
    - SEQUENCE → tuple[T, ...], Sequence[T], Iterable[T], Collection[T]
                 (reconstruídos como tupla a cada bind)
    - SET      → set, frozenset, AbstractSet, MutableSet
    - MAPPING  → dict, Mapping, MutableMapping (e Any/object)
    - OBJECT   → demais classes, incluindo list/MutableSequence
                 (capacidade de coleção) e subclasses de dict

Decisões arquiteturais:
    - Propriedades são a união, ao longo do MRO, de anotações de classe
      (campos de dataclass incluídos) e objetos `property`
    - Em nomes repetidos prevalece a declaração mais próxima da base;
      o acesso continua despachando pela instância
    - Nomes iniciados por "_" são não públicos
    - O nome de configuração pode ser trocado com `ConfigKey` ou
      `field(metadata=config_key(...))`
    - Construtores alternativos são classmethods marcados com
      `@binding_constructor`; sem marcação, vale `__init__`

Invariantes:
    - Descritores são imutáveis e seguros para uso concorrente
    - Anotações não resolvíveis degradam para `Any`
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import datetime
import decimal
import enum
import functools
import inspect
import logging
import pathlib
import sys
import types
import uuid
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Callable,
    ClassVar,
    Dict,
    ForwardRef,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ..config.tree import ConfigNode

logger = logging.getLogger(__name__)

NoneType = type(None)

CONFIG_KEY_METADATA = "polybind.config_key"
BINDING_CONSTRUCTOR_ATTR = "__polybind_constructor__"


class StructuralKind(str, enum.Enum):
    RAW = "raw"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    SET = "set"
    MAPPING = "mapping"
    OBJECT = "object"


class Capability(str, enum.Enum):
    NONE = "none"
    COLLECTION = "collection"
    DICTIONARY = "dictionary"


class PropertyKind(str, enum.Enum):
    ATTRIBUTE = "attribute"
    PROPERTY = "property"


# ---------------------------------------------------------------------------
# Marcadores públicos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigKey:
    """Nome alternativo de configuração: `Annotated[T, ConfigKey("Nome")]`."""

    name: str


def config_key(name: str) -> Dict[str, str]:
    """Metadata de dataclass com nome alternativo: `field(metadata=config_key("Nome"))`."""
    return {CONFIG_KEY_METADATA: name}


def binding_constructor(func: Any) -> Any:
    """
    Marca um classmethod/staticmethod como construtor disponível ao binder.

    Quando uma classe declara ao menos um construtor marcado, apenas os
    marcados são considerados; `__init__` deixa de ser candidato.
    """
    target = func.__func__ if isinstance(func, (classmethod, staticmethod)) else func
    setattr(target, BINDING_CONSTRUCTOR_ATTR, True)
    return func


# ---------------------------------------------------------------------------
# Descritores
# ---------------------------------------------------------------------------

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    annotation: Any
    kind: inspect._ParameterKind
    has_default: bool
    default: Any = None

    @property
    def bindable_by_name(self) -> bool:
        return self.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)

    @property
    def variadic(self) -> bool:
        return self.kind in _VARIADIC

    @property
    def optional(self) -> bool:
        return self.has_default or self.kind in _VARIADIC


@dataclass(frozen=True)
class ConstructorDescriptor:
    name: str
    parameters: Tuple[ParameterDescriptor, ...] = ()

    @property
    def is_parameterless(self) -> bool:
        return all(p.optional for p in self.parameters)

    def invoke(self, cls: type, kwargs: Mapping[str, Any]) -> Any:
        factory = cls if self.name == "__init__" else getattr(cls, self.name)
        return factory(**kwargs)


@dataclass(frozen=True)
class PropertyDescriptor:
    name: str
    config_key: str
    annotation: Any
    kind: PropertyKind
    has_getter: bool
    has_setter: bool
    is_public: bool
    init: bool
    declared_in: type

    def matches(self, key: str) -> bool:
        folded = key.casefold()
        return folded == self.name.casefold() or folded == self.config_key.casefold()

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.name, None)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Descrição estrutural imutável de um tipo de destino.

    Campos:
        - target: anotação original
        - kind: tipo estrutural
        - cls: classe concreta usada para instanciar (None para Any/Union)
        - nullable: o destino era Optional[...]
        - scalar: aceita conversão a partir de texto
        - element_type / key_type / value_type: parâmetros de containers
        - is_abstract: exige identificador de tipo para construção
        - is_read_only_view: container que precisa ser clonado antes de mutar
        - is_frozen: dataclass congelada (binding gera cópia modificada)
        - capability: coleção/dicionário para classes OBJECT
        - union_members: classes aceitas por um slot Union
        - constructors / properties: membros vinculáveis
    """

    target: Any
    kind: StructuralKind
    cls: Optional[type] = None
    nullable: bool = False
    scalar: bool = False
    element_type: Any = Any
    key_type: Any = Any
    value_type: Any = Any
    is_abstract: bool = False
    is_read_only_view: bool = False
    is_frozen: bool = False
    capability: Capability = Capability.NONE
    union_members: Tuple[type, ...] = ()
    constructors: Tuple[ConstructorDescriptor, ...] = ()
    properties: Tuple[PropertyDescriptor, ...] = ()

    @property
    def name(self) -> str:
        if self.cls is not None and not self.union_members:
            return self.cls.__qualname__
        return repr(self.target)

    def find_property(self, key: str) -> Optional[PropertyDescriptor]:
        for prop in self.properties:
            if prop.matches(key):
                return prop
        return None

    def accepts(self, value: Any) -> bool:
        """Verifica se uma instância produzida por binder customizado cabe no destino."""
        if self.union_members:
            return isinstance(value, self.union_members)
        if self.cls is None or getattr(self.cls, "_is_protocol", False):
            return True
        return isinstance(value, self.cls)


# ---------------------------------------------------------------------------
# Classificação
# ---------------------------------------------------------------------------

_SCALAR_TYPES: Tuple[type, ...] = (
    str,
    bool,
    int,
    float,
    decimal.Decimal,
    uuid.UUID,
    bytes,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    pathlib.PurePath,
)

_SEQUENCE_ORIGINS = {tuple, cabc.Sequence, cabc.Iterable, cabc.Collection, cabc.Reversible}
_SET_ORIGINS = {set, frozenset, cabc.Set, cabc.MutableSet}
_READ_ONLY_SETS = {frozenset, cabc.Set}
_MAPPING_ORIGINS = {dict, cabc.Mapping, cabc.MutableMapping}
_LIST_ORIGINS = {list, cabc.MutableSequence}

_UNION_ORIGINS = {Union, types.UnionType}


def _is_scalar_class(cls: type) -> bool:
    if issubclass(cls, enum.Enum) or issubclass(cls, _SCALAR_TYPES):
        return True
    return callable(getattr(cls, "from_config_value", None))


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def _strip_annotated(annotation: Any) -> Tuple[Any, Tuple[Any, ...]]:
    extras: Tuple[Any, ...] = ()
    while get_origin(annotation) is Annotated:
        args = get_args(annotation)
        annotation, extras = args[0], extras + tuple(args[1:])
    return annotation, extras


def _config_key_from(annotation: Any) -> Optional[str]:
    _, extras = _strip_annotated(annotation)
    for extra in extras:
        if isinstance(extra, ConfigKey) and extra.name.strip():
            return extra.name
    return None


def _is_any(annotation: Any) -> bool:
    return (
        annotation is Any
        or annotation is object
        or isinstance(annotation, (TypeVar, ForwardRef, str))
    )


def _resolve_hints(obj: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(obj, include_extras=True)
    except (NameError, TypeError, AttributeError) as exc:
        logger.debug("anotações não resolvidas em %r: %s", obj, exc)
        return {}


def _class_hints(klass: type, own: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Resolve as anotações declaradas em `klass`.

    Quando `get_type_hints` falha para a classe inteira, cada anotação é
    avaliada isoladamente; só as que continuam sem resolução viram `Any`.
    """
    hints = _resolve_hints(klass)
    if hints or not any(isinstance(raw, str) for raw in own.values()):
        return hints

    module = sys.modules.get(klass.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(klass))
    resolved: Dict[str, Any] = {}
    for name, raw in own.items():
        if not isinstance(raw, str):
            resolved[name] = raw
            continue
        try:
            resolved[name] = eval(raw, globalns, localns)  # noqa: S307
        except (NameError, SyntaxError, TypeError, AttributeError) as exc:
            logger.warning(
                "anotação '%s' de %s não resolvida (%s); tratada como Any",
                name,
                klass.__qualname__,
                exc,
            )
    return resolved


def _generic_args(cls: type, origins: Tuple[type, ...]) -> Tuple[Any, ...]:
    for klass in cls.__mro__:
        for base in getattr(klass, "__orig_bases__", ()):
            if get_origin(base) in origins:
                return get_args(base)
    return ()


def _is_classvar(annotation: Any) -> bool:
    stripped, _ = _strip_annotated(annotation)
    if stripped is ClassVar or get_origin(stripped) is ClassVar:
        return True
    if isinstance(stripped, str):
        return stripped.startswith(("ClassVar", "typing.ClassVar"))
    return isinstance(stripped, dataclasses.InitVar)


def _collect_properties(cls: type) -> Tuple[PropertyDescriptor, ...]:
    is_dataclass = dataclasses.is_dataclass(cls)
    fields = {f.name: f for f in dataclasses.fields(cls)} if is_dataclass else {}
    frozen = bool(is_dataclass and cls.__dataclass_params__.frozen)
    immutable = frozen or issubclass(cls, tuple)

    found: Dict[str, PropertyDescriptor] = {}

    for klass in reversed(cls.__mro__):
        if klass is object or klass.__module__ in ("builtins", "typing", "abc", "collections.abc"):
            continue

        own = inspect.get_annotations(klass)
        hints = _class_hints(klass, own) if own else {}
        for name, raw in own.items():
            annotation = hints.get(name, Any if isinstance(raw, str) else raw)
            if _is_classvar(annotation) or _is_classvar(raw):
                continue
            if name.casefold() in found:
                continue
            field = fields.get(name)
            metadata_key = field.metadata.get(CONFIG_KEY_METADATA) if field is not None else None
            found[name.casefold()] = PropertyDescriptor(
                name=name,
                config_key=_config_key_from(annotation) or metadata_key or name,
                annotation=annotation,
                kind=PropertyKind.ATTRIBUTE,
                has_getter=True,
                has_setter=not immutable,
                is_public=not name.startswith("_"),
                init=field.init if field is not None else True,
                declared_in=klass,
            )

        for name, attr in vars(klass).items():
            if not isinstance(attr, property) or name.casefold() in found:
                continue
            annotation = _resolve_hints(attr.fget).get("return", Any) if attr.fget else Any
            found[name.casefold()] = PropertyDescriptor(
                name=name,
                config_key=_config_key_from(annotation) or name,
                annotation=annotation,
                kind=PropertyKind.PROPERTY,
                has_getter=attr.fget is not None,
                has_setter=attr.fset is not None,
                is_public=not name.startswith("_"),
                init=False,
                declared_in=klass,
            )

    return tuple(found.values())


def _describe_constructor(name: str, factory: Callable[..., Any]) -> ConstructorDescriptor:
    try:
        signature = inspect.signature(factory, eval_str=True)
    except (NameError, SyntaxError, TypeError):
        try:
            signature = inspect.signature(factory)
        except (ValueError, TypeError):
            return ConstructorDescriptor(name=name)
    except ValueError:
        # builtins sem assinatura introspectável
        return ConstructorDescriptor(name=name)

    parameters = []
    for param in signature.parameters.values():
        annotation = param.annotation
        if annotation is inspect.Parameter.empty or isinstance(annotation, str):
            annotation = Any
        has_default = param.default is not inspect.Parameter.empty
        parameters.append(
            ParameterDescriptor(
                name=param.name,
                annotation=annotation,
                kind=param.kind,
                has_default=has_default,
                default=param.default if has_default else None,
            )
        )
    return ConstructorDescriptor(name=name, parameters=tuple(parameters))


def _collect_constructors(cls: type) -> Tuple[ConstructorDescriptor, ...]:
    marked = []
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if not isinstance(attr, (classmethod, staticmethod)) or name in marked:
                continue
            if getattr(attr.__func__, BINDING_CONSTRUCTOR_ATTR, False):
                marked.append(name)

    if marked:
        return tuple(_describe_constructor(name, getattr(cls, name)) for name in marked)
    return (_describe_constructor("__init__", cls),)


def _any_descriptor(target: Any, nullable: bool = False) -> TypeDescriptor:
    # Any: folhas viram texto, seções viram dict[str, Any]
    return TypeDescriptor(
        target=target,
        kind=StructuralKind.MAPPING,
        nullable=nullable,
        scalar=True,
        key_type=str,
        value_type=Any,
    )


def _build_descriptor(target: Any) -> TypeDescriptor:
    inner, _ = _strip_annotated(target)
    origin = get_origin(inner)
    args = get_args(inner)

    if origin in _UNION_ORIGINS:
        members = tuple(a for a in args if a is not NoneType)
        nullable = len(members) != len(args)
        if len(members) == 1:
            return dataclasses.replace(describe(members[0]), target=target, nullable=nullable or describe(members[0]).nullable)
        classes = []
        for member in members:
            member_cls = get_origin(member) or member
            if isinstance(member_cls, type):
                classes.append(member_cls)
        return TypeDescriptor(
            target=target,
            kind=StructuralKind.OBJECT,
            nullable=nullable,
            is_abstract=True,
            union_members=tuple(classes),
        )

    if inner is ConfigNode:
        return TypeDescriptor(target=target, kind=StructuralKind.RAW, cls=ConfigNode)

    if _is_any(inner):
        return _any_descriptor(target)

    cls = origin if origin is not None else inner
    if not isinstance(cls, type):
        # Literal, NewType e afins: tratados como texto livre
        return _any_descriptor(target)

    if _is_scalar_class(cls):
        return TypeDescriptor(
            target=target,
            kind=StructuralKind.SCALAR,
            cls=cls,
            scalar=True,
            constructors=_collect_constructors(cls),
        )

    if cls in _SET_ORIGINS:
        return TypeDescriptor(
            target=target,
            kind=StructuralKind.SET,
            cls=frozenset if cls is frozenset else set,
            element_type=args[0] if args else Any,
            is_read_only_view=cls in _READ_ONLY_SETS,
        )

    if cls in _MAPPING_ORIGINS:
        return TypeDescriptor(
            target=target,
            kind=StructuralKind.MAPPING,
            cls=dict,
            key_type=args[0] if args else str,
            value_type=args[1] if len(args) > 1 else Any,
            is_read_only_view=cls is cabc.Mapping,
        )

    if cls in _LIST_ORIGINS:
        return TypeDescriptor(
            target=target,
            kind=StructuralKind.OBJECT,
            cls=list,
            element_type=args[0] if args else Any,
            capability=Capability.COLLECTION,
            constructors=(ConstructorDescriptor(name="__init__"),),
        )

    if cls in _SEQUENCE_ORIGINS:
        if cls is tuple and args:
            distinct = {a for a in args if a is not Ellipsis}
            element = distinct.pop() if len(distinct) == 1 else Any
        else:
            element = args[0] if args else Any
        return TypeDescriptor(
            target=target,
            kind=StructuralKind.SEQUENCE,
            cls=tuple,
            element_type=element,
        )

    capability = Capability.NONE
    key_type: Any = Any
    value_type: Any = Any
    element_type: Any = Any
    if issubclass(cls, (dict, cabc.MutableMapping)):
        capability = Capability.DICTIONARY
        generic = _generic_args(cls, (dict, cabc.MutableMapping, cabc.Mapping))
        key_type = generic[0] if generic else str
        value_type = generic[1] if len(generic) > 1 else Any
    elif issubclass(cls, (list, cabc.MutableSequence)):
        capability = Capability.COLLECTION
        generic = _generic_args(cls, (list, cabc.MutableSequence, cabc.Sequence))
        element_type = generic[0] if generic else Any

    return TypeDescriptor(
        target=target,
        kind=StructuralKind.OBJECT,
        cls=cls,
        element_type=element_type,
        key_type=key_type,
        value_type=value_type,
        is_abstract=inspect.isabstract(cls) or _is_protocol(cls),
        is_frozen=bool(dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen),
        capability=capability,
        constructors=_collect_constructors(cls),
        properties=_collect_properties(cls),
    )


@functools.lru_cache(maxsize=1024)
def _describe_cached(target: Any) -> TypeDescriptor:
    return _build_descriptor(target)


def describe(target: Any) -> TypeDescriptor:
    """
    Retorna o descritor (em cache) do tipo de destino informado.

    Anotações não hasheáveis são descritas sem cache.
    """
    try:
        hash(target)
    except TypeError:
        return _build_descriptor(target)
    return _describe_cached(target)
