# src/polybind/core/options/catalog.py
"""
Catálogo de opções nomeadas.

Este módulo define o `OptionsCatalog`, a interface de leitura pela qual
colaboradores observam objetos de opções já populados, sem conhecer a
árvore de configuração nem o engine de binding.

Cada registro associa `(tipo, nome)` a uma seção da configuração. A
instância é criada sob demanda na primeira leitura, populada pelo engine,
opcionalmente ajustada por um hook `configure(section, instance)` e mantida
em cache até o próximo `reload`.

Responsabilidades do módulo:
    - Validar unicidade de `(tipo, nome)` no registro
    - Construir e popular instâncias de forma preguiçosa
    - Expor o gatilho explícito de recarga (`reload`)

Decisões arquiteturais:
    - O cache é protegido por lock reentrante (hooks podem ler o catálogo)
    - `reload` descarta todas as instâncias; a próxima leitura reconstrói
    - O catálogo não observa fontes: recarregar é decisão externa

Invariantes:
    - Cada `(tipo, nome)` é registrado uma única vez
    - Leituras sem recarga intermediária devolvem a mesma instância

Limites explícitos:
    - Não entrega notificações de mudança
    - Não valida regras de negócio das opções
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..binding.engine import BindingContext
from ..binding.options import BinderOptions
from ..binding.registry import CustomBinderRegistry
from ..config.tree import ConfigNode

logger = logging.getLogger(__name__)

ConfigureHook = Callable[[ConfigNode, Any], Any]


class DuplicateOptionsRegistrationError(ValueError):
    """Registro repetido para o mesmo par `(tipo, nome)`."""


class UnknownOptionsError(KeyError):
    """Leitura de um par `(tipo, nome)` que nunca foi registrado."""


@dataclass(frozen=True)
class OptionsRegistration:
    options_type: type
    section: str
    name: str = ""
    configure: Optional[ConfigureHook] = None
    binder_options: Optional[BinderOptions] = None


class OptionsCatalog:
    """
    Catálogo thread-safe de instâncias de opções populadas a partir da configuração.

    Exemplo:
        catalog = OptionsCatalog(root, registry=registry)
        catalog.register(ListOptions, "List")
        options = catalog.get(ListOptions)
    """

    def __init__(
        self,
        root: ConfigNode,
        registry: Optional[CustomBinderRegistry] = None,
        options: Optional[BinderOptions] = None,
    ) -> None:
        self._root = root
        self._registry = registry if registry is not None else CustomBinderRegistry()
        self._options = options if options is not None else BinderOptions()
        self._registrations: Dict[Tuple[type, str], OptionsRegistration] = {}
        self._cache: Dict[Tuple[type, str], Any] = {}
        self._lock = threading.RLock()

    @property
    def root(self) -> ConfigNode:
        return self._root

    def register(
        self,
        options_type: type,
        section: str,
        *,
        name: str = "",
        configure: Optional[ConfigureHook] = None,
        binder_options: Optional[BinderOptions] = None,
    ) -> None:
        key = (options_type, name)
        with self._lock:
            if key in self._registrations:
                raise DuplicateOptionsRegistrationError(
                    f"Duplicate options registration: {options_type.__qualname__} (name={name!r})"
                )
            self._registrations[key] = OptionsRegistration(
                options_type=options_type,
                section=section,
                name=name,
                configure=configure,
                binder_options=binder_options,
            )

    def get(self, options_type: type, name: str = "") -> Any:
        key = (options_type, name)
        with self._lock:
            if key in self._cache:
                return self._cache[key]

            registration = self._registrations.get(key)
            if registration is None:
                raise UnknownOptionsError(f"{options_type.__qualname__} (name={name!r})")

            instance = self._build(registration)
            self._cache[key] = instance
            return instance

    def names(self, options_type: type) -> List[str]:
        with self._lock:
            return [n for (t, n) in self._registrations if t is options_type]

    def reload(self, root: ConfigNode) -> None:
        """Troca a raiz de configuração e descarta as instâncias em cache."""
        with self._lock:
            self._root = root
            dropped = len(self._cache)
            self._cache.clear()
        logger.info("catálogo de opções recarregado (%d instâncias descartadas)", dropped)

    def _build(self, registration: OptionsRegistration) -> Any:
        section = self._root.get_section(registration.section)
        context = BindingContext(
            options=registration.binder_options or self._options,
            registry=self._registry,
        )

        instance = context.construct_or_rebind(registration.options_type, section)
        if registration.configure is not None:
            configured = registration.configure(section, instance)
            if configured is not None:
                instance = configured

        logger.debug(
            "opções %s (name=%r) construídas a partir de '%s'",
            registration.options_type.__qualname__,
            registration.name,
            section.path,
        )
        return instance
