# tests/core/binding/test_engine_scalars.py
"""
Testes do binding de folhas escalares e do binder de propriedades.

Os testes asseguram que:
- folhas escalares sempre sobrescrevem o valor anterior (sem merge)
- rebinding em instância existente só altera propriedades presentes no nó
- nomes alternativos (`config_key`) e propriedades não públicas seguem as opções
- falhas de conversão abortam o bind com o path do nó

Limites explícitos:
    - Não valida despacho polimórfico (ver test_engine_polymorphism)
"""

from datetime import timedelta
from decimal import Decimal
from pathlib import Path

import pytest

from polybind import ConfigurationBinder, bind, get, get_value
from polybind.core.binding.errors import ConversionError
from polybind.core.binding.options import BinderOptions
from tests.fixtures.models import (
    Celsius,
    Color,
    MappingOptions,
    Permission,
    ScalarOptions,
    TemperatureOptions,
)


def test_all_supported_scalars_bind(tree):
    options = get(
        tree(
            {
                "Name": "svc",
                "Count": "3",
                "Ratio": "0.5",
                "Enabled": "True",
                "Color": "green",
                "Permissions": "READ, EXECUTE",
                "Timeout": "00:00:30",
                "Amount": "9.99",
                "Home": "/srv/app",
                "Limit": "",
                "Version": "1.2",
                "Anything": "free text",
                "ApiKey": "k-1",
            }
        ),
        ScalarOptions,
    )

    assert options.name == "svc"
    assert options.count == 3
    assert options.ratio == 0.5
    assert options.enabled is True
    assert options.color is Color.GREEN
    assert options.permissions == Permission.READ | Permission.EXECUTE
    assert options.timeout == timedelta(seconds=30)
    assert options.amount == Decimal("9.99")
    assert options.home == Path("/srv/app")
    assert options.limit is None
    assert (options.version.major, options.version.minor) == (1, 2)
    assert options.anything == "free text"
    assert options.api_key == "k-1"


def test_scalar_leaf_second_bind_wins(tree):
    """
    A segunda folha sempre vence: não há merge de valores escalares.
    """
    options = ScalarOptions()

    bind(tree({"Name": "first", "Count": "1"}), options)
    bind(tree({"Name": "second"}), options)

    assert options.name == "second"
    assert options.count == 1


def test_rebind_keeps_properties_absent_from_node(tree):
    """
    Binding em instância existente só sobrescreve as propriedades cujo
    nó filho está presente; as demais mantêm o valor anterior.
    """
    options = ScalarOptions(name="keep", count=5, color=Color.BLUE)

    returned = bind(tree({"Count": "7"}), options)

    assert returned is options
    assert options.count == 7
    assert options.name == "keep"
    assert options.color is Color.BLUE


def test_get_returns_none_when_nothing_applies(tree):
    assert get(tree({}), ScalarOptions) is None


def test_non_public_properties_require_opt_in(tree):
    node = tree({"_secret": "s3cr3t"})

    assert get(node, ScalarOptions)._secret == ""
    opted = get(node, ScalarOptions, options=BinderOptions(bind_non_public_properties=True))
    assert opted._secret == "s3cr3t"


def test_config_key_override_is_the_only_name_read(tree):
    options = get(tree({"api_key": "wrong", "ApiKey": "right"}), ScalarOptions)
    assert options.api_key == "right"


def test_conversion_error_aborts_with_path(tree):
    with pytest.raises(ConversionError) as exc_info:
        get(tree({"Server": {"Count": "abc"}}).get_section("Server"), ScalarOptions)

    assert exc_info.value.path == "Server:Count"
    assert exc_info.value.details["value"] == "abc"


def test_options_converters_are_used(tree):
    options = BinderOptions(converters={Celsius: lambda text: Celsius(float(text))})

    bound = get(tree({"Outside": "-3.5"}), TemperatureOptions, options=options)

    assert bound.outside.degrees == -3.5


def test_any_values_bind_as_text_and_nested_dicts(tree):
    options = get(
        tree({"Extra": {"a": 1, "nested": {"b": "2"}, "list": ["x", "y"]}}),
        MappingOptions,
    )

    assert options.extra == {"a": "1", "nested": {"b": "2"}, "list": {"0": "x", "1": "y"}}


def test_get_value_reads_one_child(tree):
    node = tree({"Count": "5"})

    assert get_value(node, int, "count") == 5
    assert get_value(node, int, "Missing", default=3) == 3


def test_configuration_binder_keeps_context(tree):
    binder = ConfigurationBinder(options=BinderOptions(bind_non_public_properties=True))
    options = ScalarOptions()

    binder.bind(tree({"Count": "2", "_secret": "x"}), options)

    assert (options.count, options._secret) == (2, "x")
    assert binder.get_value(tree({"Ratio": "1.5"}), float, "Ratio") == 1.5
    assert binder.options.bind_non_public_properties is True
