# src/polybind/core/options/__init__.py
"""
Catálogo de opções nomeadas: interface de leitura para colaboradores.
"""

from .catalog import (
    DuplicateOptionsRegistrationError,
    OptionsCatalog,
    OptionsRegistration,
    UnknownOptionsError,
)

__all__ = [
    "DuplicateOptionsRegistrationError",
    "OptionsCatalog",
    "OptionsRegistration",
    "UnknownOptionsError",
]
