# tests/conftest.py
"""
Fixtures compartilhados para testes do Polybind.

Este módulo define fixtures reutilizáveis que fornecem:
- construção de árvores `ConfigNode` a partir de dados literais
- registry de binders para a hierarquia polimórfica de teste
- conteúdos YAML determinísticos para testes do loader

Decisões arquiteturais:
    - Árvores são construídas em memória (sem I/O) via `ConfigNode.from_mapping`
    - O registry é recriado por teste (registries congelam ao serem usados)
    - Tipos de destino vivem em `tests/fixtures/models.py`

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture depende de variáveis de ambiente reais
"""

import pytest


@pytest.fixture
def tree():
    """
    Fixture factory: dados literais (dict/list/escalares) → `ConfigNode`.

    Returns:
        Callable[[dict], ConfigNode]
    """
    from polybind.core.config.tree import ConfigNode

    return ConfigNode.from_mapping


@pytest.fixture
def registry():
    """
    Registry com os identificadores "derived1" e "derived2".

    Returns:
        CustomBinderRegistry: congelado, pronto para binding.
    """
    from polybind.core.binding.registry import CustomBinderRegistry
    from tests.fixtures.models import Derived1, Derived2

    return CustomBinderRegistry.of_types({"derived1": Derived1, "derived2": Derived2})


@pytest.fixture
def strict_options():
    from polybind.core.binding.options import BinderOptions

    return BinderOptions(error_on_unknown_configuration=True)


@pytest.fixture
def list_defaults_yaml() -> str:
    """
    YAML de defaults com uma lista polimórfica.

    Usado por:
        - Testes do loader (defaults + local + ambiente)
        - Testes do catálogo de opções
    """
    return """\
List:
  Items:
    - _Type: derived1
      X: "1"
    - _Type: derived2
      Y: "2"
Dictionary:
  Items:
    derived1:
      X: "10"
"""


@pytest.fixture
def list_local_yaml() -> str:
    """YAML local que sobrescreve o primeiro item e adiciona um terceiro."""
    return """\
list:
  items:
    - X: "override"
    - _Type: derived2
      Y: "2"
    - _Type: derived1
      X: "3"
"""
