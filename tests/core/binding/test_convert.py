# tests/core/binding/test_convert.py
"""
Testes da conversão de folhas textuais para escalares.

Os testes asseguram que:
- cada tipo escalar suportado converte a partir do texto
- enums aceitam nome (case-insensitive), valor e combinações de flags
- falhas viram `ConversionError` com path e valor originais
- conversores das opções têm precedência sobre os nativos
"""

import datetime
import uuid
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import pytest

from polybind.core.binding.convert import convert_value, is_scalar_target, parse_timedelta
from polybind.core.binding.descriptor import describe
from polybind.core.binding.errors import ConversionError
from polybind.core.binding.options import BinderOptions
from tests.fixtures.models import Celsius, Color, Permission, Version


def _convert(target, text, options=None):
    return convert_value(describe(target), text, "Section:Key", options or BinderOptions())


@pytest.mark.parametrize(
    "target, text, expected",
    [
        (str, " keep spaces ", " keep spaces "),
        (int, "42", 42),
        (int, "0x1F", 31),
        (float, "1.5", 1.5),
        (bool, "TRUE", True),
        (bool, "false", False),
        (Decimal, "10.25", Decimal("10.25")),
        (Color, "green", Color.GREEN),
        (Color, "Blue", Color.BLUE),
        (Permission, "read, write", Permission.READ | Permission.WRITE),
        (uuid.UUID, "12345678-1234-5678-1234-567812345678", uuid.UUID("12345678-1234-5678-1234-567812345678")),
        (bytes, "aGVsbG8=", b"hello"),
        (datetime.date, "2024-02-29", datetime.date(2024, 2, 29)),
        (datetime.time, "13:45:00", datetime.time(13, 45)),
        (Path, "/var/log", Path("/var/log")),
        (Any, "raw", "raw"),
    ],
)
def test_builtin_conversions(target, text, expected):
    assert _convert(target, text) == expected


def test_datetime_accepts_utc_suffix():
    value = _convert(datetime.datetime, "2024-01-02T03:04:05Z")
    assert value == datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)


def test_timedelta_formats():
    assert parse_timedelta("90") == datetime.timedelta(seconds=90)
    assert parse_timedelta("00:01:30") == datetime.timedelta(minutes=1, seconds=30)
    assert parse_timedelta("1.02:00:00") == datetime.timedelta(days=1, hours=2)
    assert parse_timedelta("-00:00:01.5") == -datetime.timedelta(seconds=1, microseconds=500000)


def test_optional_empty_text_is_none():
    assert _convert(Optional[int], "") is None
    assert _convert(Optional[str], "") == ""


def test_from_config_value_hook():
    version = _convert(Version, "2.7")
    assert (version.major, version.minor) == (2, 7)


def test_options_converter_makes_type_scalar():
    options = BinderOptions(converters={Celsius: lambda text: Celsius(float(text))})

    assert is_scalar_target(describe(Celsius), BinderOptions()) is False
    assert is_scalar_target(describe(Celsius), options) is True
    assert _convert(Celsius, "21.5", options).degrees == 21.5


def test_conversion_failure_carries_path_and_value():
    """
    A falha preserva path, valor e tipo de destino em `details`, e a
    exceção original como causa.
    """
    with pytest.raises(ConversionError) as exc_info:
        _convert(int, "abc")

    err = exc_info.value
    assert err.path == "Section:Key"
    assert err.details["value"] == "abc"
    assert err.details["target"] == "int"
    assert isinstance(err.__cause__, ValueError)
    assert "Section:Key" in str(err)
    assert err.to_payload()["type"] == "ConversionError"


@pytest.mark.parametrize("target, text", [(bool, "yes"), (Color, "purple"), (bytes, "***"), (datetime.date, "2024-13-01")])
def test_invalid_values_raise(target, text):
    with pytest.raises(ConversionError):
        _convert(target, text)
