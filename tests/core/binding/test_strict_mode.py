# tests/core/binding/test_strict_mode.py
"""
Testes do modo estrito (`error_on_unknown_configuration`).

Os testes asseguram que:
- chaves sem propriedade de destino abortam o bind com a lista de chaves
- a chave discriminadora nunca é considerada desconhecida
- falhas de itens de coleção são propagadas com o path do item
- no modo leniente, as mesmas falhas viram warning e o item é descartado
"""

import logging

import pytest

from polybind import BinderOptions, bind, get
from polybind.core.binding.errors import (
    CollectionItemBindingError,
    ConversionError,
    UnknownConfigurationKeyError,
)
from tests.fixtures.models import BagOptions, ListOptions, ScalarOptions, Secretive, SequenceOptions, StrictOptions


def test_unknown_key_is_reported(tree, strict_options):
    with pytest.raises(UnknownConfigurationKeyError) as exc_info:
        get(tree({"A": "1", "B": "2", "C": "3"}), StrictOptions, options=strict_options)

    assert exc_info.value.details["keys"] == ["C"]
    assert "C" in str(exc_info.value)


def test_unknown_keys_are_ignored_when_lenient(tree):
    options = get(tree({"A": "1", "B": "2", "C": "3"}), StrictOptions)

    assert (options.a, options.b) == ("1", "2")


def test_config_key_and_property_name_are_both_known(tree, strict_options):
    options = get(tree({"ApiKey": "k", "api_key": "ignored"}), ScalarOptions, options=strict_options)

    assert options.api_key == "k"


def test_type_key_is_exempt(tree, registry, strict_options):
    options = get(
        tree({"Items": [{"_Type": "derived1", "X": "1"}]}),
        ListOptions,
        registry=registry,
        options=strict_options,
    )

    assert options.items[0].x == "1"


def test_unknown_key_inside_item_is_wrapped(tree, registry, strict_options):
    with pytest.raises(CollectionItemBindingError) as exc_info:
        get(
            tree({"Items": [{"_Type": "derived1", "X": "1", "Z": "2"}]}),
            ListOptions,
            registry=registry,
            options=strict_options,
        )

    error = exc_info.value
    assert error.path == "Items:0"
    assert error.details["cause"] == "UnknownConfigurationKeyError"
    assert isinstance(error.__cause__, UnknownConfigurationKeyError)


def test_item_conversion_failure_strict_and_lenient(tree, strict_options, caplog):
    node = tree({"Values": ["1", "x", "3"]})

    with pytest.raises(CollectionItemBindingError) as exc_info:
        get(node, SequenceOptions, options=strict_options)
    assert exc_info.value.path == "Values:1"
    assert isinstance(exc_info.value.__cause__, ConversionError)

    with caplog.at_level(logging.WARNING, logger="polybind.core.binding.engine"):
        options = get(node, SequenceOptions)
    assert options.values == (1, 3)
    assert "Values:1" in caplog.text


def test_innermost_item_path_is_preserved(tree, strict_options):
    with pytest.raises(CollectionItemBindingError) as exc_info:
        get(tree({"Matrix": [["1"], ["2", "x"]]}), BagOptions, options=strict_options)

    assert exc_info.value.path == "Matrix:1:1"


def test_options_from_config_section(tree, registry):
    options = BinderOptions.from_config(
        tree(
            {
                "ErrorOnUnknownConfiguration": "true",
                "TypeKey": "kind",
                "UnknownTypeIdentifier": "skip",
            }
        )
    )

    bound = get(
        tree({"Items": [{"kind": "derived2", "Y": "y"}, {"kind": "other"}]}),
        ListOptions,
        registry=registry,
        options=options,
    )

    assert options.error_on_unknown_configuration is True
    assert options.bind_non_public_properties is False
    assert [item.label() for item in bound.items] == ["derived2:y"]


def test_non_public_key_is_unknown_without_opt_in(tree, strict_options):
    """
    Sem `bind_non_public_properties`, propriedades não públicas não são
    destino válido; a chave correspondente é tratada como desconhecida.
    """
    with pytest.raises(UnknownConfigurationKeyError) as exc_info:
        bind(tree({"Name": "n", "_secret": "leak"}), Secretive(), options=strict_options)
    assert exc_info.value.details["keys"] == ["_secret"]

    target = Secretive()
    opted = BinderOptions(error_on_unknown_configuration=True, bind_non_public_properties=True)
    bind(tree({"Name": "n", "_secret": "leak"}), target, options=opted)
    assert (target.name, target._secret) == ("n", "leak")
