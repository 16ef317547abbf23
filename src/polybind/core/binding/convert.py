# src/polybind/core/binding/convert.py
"""
Conversão de valores textuais para tipos escalares.

Ordem de resolução do conversor:
    1. `BinderOptions.converters[cls]`
    2. classmethod `cls.from_config_value(text)`
    3. conversores nativos (str, bool, int, float, Decimal, Enum, UUID,
       bytes base64, datetime/date/time ISO-8601, timedelta, Path)

Regras:
    - Qualquer falha vira `ConversionError` com o path do nó
    - `Optional[T]` recebendo "" resulta em None (exceto para `str`)
    - `timedelta` aceita segundos ("90", "1.5") ou "[d.]hh:mm[:ss[.f]]"
"""

from __future__ import annotations

import base64
import datetime
import decimal
import enum
import pathlib
import re
import uuid
from typing import Any, Callable, Optional

from .descriptor import TypeDescriptor
from .errors import BindingError, ConversionError
from .options import BinderOptions

_TIMESPAN = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)


def find_converter(desc: TypeDescriptor, options: BinderOptions) -> Optional[Callable[[str], Any]]:
    if desc.cls is None or not options.converters:
        return None
    return options.converters.get(desc.cls)


def is_scalar_target(desc: TypeDescriptor, options: BinderOptions) -> bool:
    return desc.scalar or find_converter(desc, options) is not None


def parse_bool(text: str) -> bool:
    folded = text.strip().casefold()
    if folded == "true":
        return True
    if folded == "false":
        return False
    raise ValueError(f"booleano inválido: {text!r}")


def parse_int(text: str) -> int:
    raw = text.strip()
    unsigned = raw.lstrip("+-").casefold()
    if unsigned.startswith("0x"):
        return int(raw, 16)
    return int(raw, 10)


def parse_enum(cls: type, text: str) -> Any:
    """Resolve um membro por nome (case-insensitive), valor ou combinação de flags "A, B"."""
    raw = text.strip()
    folded = raw.casefold()

    for name, member in cls.__members__.items():
        if name.casefold() == folded:
            return member
    for member in cls:
        if str(member.value).casefold() == folded:
            return member

    if issubclass(cls, enum.Flag) and "," in raw:
        result = cls(0)
        for part in raw.split(","):
            result |= parse_enum(cls, part)
        return result

    return cls(parse_int(raw))


def parse_timedelta(text: str) -> datetime.timedelta:
    raw = text.strip()
    match = _TIMESPAN.match(raw)
    if match is None:
        return datetime.timedelta(seconds=float(raw))

    fraction = (match.group("fraction") or "").ljust(6, "0")[:6]
    value = datetime.timedelta(
        days=int(match.group("days") or 0),
        hours=int(match.group("hours")),
        minutes=int(match.group("minutes")),
        seconds=int(match.group("seconds") or 0),
        microseconds=int(fraction or 0),
    )
    return -value if match.group("sign") else value


def _parse_datetime(text: str) -> datetime.datetime:
    raw = text.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    return datetime.datetime.fromisoformat(raw)


def _convert_builtin(cls: type, text: str) -> Any:
    if issubclass(cls, enum.Enum):
        return parse_enum(cls, text)
    if cls is str:
        return text
    if issubclass(cls, bool):
        return parse_bool(text)
    if issubclass(cls, int):
        return cls(parse_int(text))
    if issubclass(cls, float):
        return cls(text.strip())
    if issubclass(cls, decimal.Decimal):
        return cls(text.strip())
    if issubclass(cls, uuid.UUID):
        return cls(text.strip())
    if issubclass(cls, bytes):
        return base64.b64decode(text.strip(), validate=True)
    if issubclass(cls, datetime.datetime):
        return _parse_datetime(text)
    if issubclass(cls, datetime.date):
        return datetime.date.fromisoformat(text.strip())
    if issubclass(cls, datetime.time):
        return datetime.time.fromisoformat(text.strip())
    if issubclass(cls, datetime.timedelta):
        return parse_timedelta(text)
    if issubclass(cls, pathlib.PurePath):
        return cls(text)
    raise TypeError(f"tipo escalar sem conversor: {cls.__qualname__}")


def convert_value(desc: TypeDescriptor, text: str, path: str, options: BinderOptions) -> Any:
    """
    Converte o texto de uma folha para o tipo escalar descrito.

    Raises:
        ConversionError: Se o texto não representar um valor válido.
    """
    if desc.nullable and text == "" and desc.cls is not str:
        return None

    converter = find_converter(desc, options)
    try:
        if converter is not None:
            return converter(text)
        if desc.cls is None:
            # Any/object: o texto bruto
            return text
        hook = getattr(desc.cls, "from_config_value", None)
        if callable(hook):
            return hook(text)
        return _convert_builtin(desc.cls, text)
    except BindingError:
        raise
    except Exception as exc:
        raise ConversionError(
            message=f"Falha ao converter valor de configuração para {desc.name}",
            details={
                "path": path,
                "value": text,
                "target": desc.name,
                "reason": str(exc),
            },
            hint="Verifique o formato do valor na fonte de configuração",
        ) from exc
