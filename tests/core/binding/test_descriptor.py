# tests/core/binding/test_descriptor.py
"""
Testes do descritor de tipo de destino (`describe`).

Os testes asseguram que:
- cada anotação é classificada no tipo estrutural correto
- descritores são calculados uma vez e reutilizados (cache)
- propriedades e construtores são descobertos conforme as regras de
  visibilidade, `ClassVar`, `ConfigKey` e `@binding_constructor`

Limites explícitos:
    - Não executa binding
"""

from typing import AbstractSet, Any, Dict, FrozenSet, Iterable, List, Mapping, MutableSequence, Optional, Sequence, Set, Tuple, Union

import pytest

from polybind import get
from polybind.core.binding.descriptor import (
    Capability,
    PropertyKind,
    StructuralKind,
    describe,
)
from polybind.core.config.tree import ConfigNode
from tests.fixtures.models import (
    Bag,
    Base,
    Color,
    Derived1,
    Derived2,
    Greeter,
    ListOptions,
    OneFactory,
    PartlyResolved,
    ScalarOptions,
    SequenceOptions,
    Server,
    TwoFactories,
    Version,
)


@pytest.mark.parametrize(
    "target, kind",
    [
        (ConfigNode, StructuralKind.RAW),
        (int, StructuralKind.SCALAR),
        (str, StructuralKind.SCALAR),
        (Color, StructuralKind.SCALAR),
        (Version, StructuralKind.SCALAR),
        (Tuple[int, ...], StructuralKind.SEQUENCE),
        (Sequence[str], StructuralKind.SEQUENCE),
        (Iterable[str], StructuralKind.SEQUENCE),
        (Set[str], StructuralKind.SET),
        (FrozenSet[str], StructuralKind.SET),
        (Dict[str, int], StructuralKind.MAPPING),
        (Mapping[str, int], StructuralKind.MAPPING),
        (Any, StructuralKind.MAPPING),
        (List[int], StructuralKind.OBJECT),
        (Bag, StructuralKind.OBJECT),
        (Derived1, StructuralKind.OBJECT),
    ],
)
def test_structural_kind(target, kind):
    assert describe(target).kind is kind


def test_descriptor_is_cached():
    assert describe(ListOptions) is describe(ListOptions)


def test_optional_is_nullable_and_unwrapped():
    desc = describe(Optional[int])
    assert desc.nullable is True
    assert desc.kind is StructuralKind.SCALAR
    assert desc.cls is int


def test_container_parameters():
    assert describe(Dict[Color, int]).key_type is Color
    assert describe(Dict[Color, int]).value_type is int
    assert describe(Tuple[int, ...]).element_type is int
    assert describe(Mapping[str, int]).is_read_only_view is True
    assert describe(Dict[str, int]).is_read_only_view is False
    assert describe(AbstractSet[str]).is_read_only_view is True
    assert describe(FrozenSet[str]).cls is frozenset


def test_list_like_targets_have_collection_capability():
    for target in (List[Base], MutableSequence[Base]):
        desc = describe(target)
        assert desc.capability is Capability.COLLECTION
        assert desc.cls is list
        assert desc.element_type is Base


def test_dict_subclass_has_dictionary_capability():
    desc = describe(Bag)
    assert desc.capability is Capability.DICTIONARY
    assert desc.key_type is str
    assert desc.value_type is int


def test_polymorphic_slots_are_abstract():
    assert describe(Base).is_abstract is True
    assert describe(Greeter).is_abstract is True
    assert describe(Derived1).is_abstract is False

    union = describe(Union[Derived1, Derived2])
    assert union.is_abstract is True
    assert union.union_members == (Derived1, Derived2)
    assert union.accepts(Derived2()) is True
    assert union.accepts("text") is False


def test_properties_respect_classvar_visibility_and_config_key():
    """
    `ClassVar` fica fora; nomes com "_" são não públicos; `config_key`
    troca o nome lido da configuração.
    """
    desc = describe(ScalarOptions)
    names = [p.name for p in desc.properties]

    assert "instances" not in names
    assert desc.find_property("_secret").is_public is False
    assert desc.find_property("ApiKey").name == "api_key"
    assert desc.find_property("api_key").config_key == "ApiKey"


def test_annotated_config_key_and_properties():
    desc = describe(ListOptions)
    raw = desc.find_property("raw_items")
    assert raw.config_key == "Items"

    fixed = describe(SequenceOptions).find_property("fixed")
    assert fixed.kind is PropertyKind.PROPERTY
    assert fixed.has_getter is True
    assert fixed.has_setter is False


def test_constructors():
    server = describe(Server).constructors
    assert [c.name for c in server] == ["__init__"]
    assert [p.name for p in server[0].parameters] == ["host", "port"]
    assert server[0].is_parameterless is False

    assert sorted(c.name for c in describe(TwoFactories).constructors) == ["from_pair", "from_value"]
    assert [c.name for c in describe(OneFactory).constructors] == ["create"]
    assert describe(Derived1).constructors[0].is_parameterless is True


def test_unresolvable_annotation_only_degrades_itself(tree):
    """
    Uma anotação textual sem resolução vira `Any` sem arrastar as demais
    anotações da mesma classe.
    """
    desc = describe(PartlyResolved)

    assert desc.find_property("count").annotation is int
    assert desc.find_property("later").annotation is Any

    bound = get(tree({"Count": "3", "Later": "x"}), PartlyResolved)
    assert (bound.count, bound.later) == (3, "x")
