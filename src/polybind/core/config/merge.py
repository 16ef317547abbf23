# src/polybind/core/config/merge.py
"""
Deep-merge de fontes de configuração.

Este módulo implementa a política de composição de fontes (defaults,
overrides locais e ambiente) antes da construção da árvore `ConfigNode`.

Política de merge:
    - dict + dict → merge recursivo por chave, sem distinção de caixa
    - list        → tratada como seção indexada ("0", "1", ...) e
                    mesclada índice a índice
    - escalar     → sobrescrita direta pelo override
    - seção vs escalar → erro estrutural explícito
    - null        → não define forma; prevalece a fonte não nula

Princípios fundamentais:
    - O merge é puramente funcional (inputs não são mutados)
    - A grafia da chave que aparece primeiro é preservada
    - A ordem de chaves da base é preservada; chaves novas vão ao final

Limites explícitos:
    - Não carrega arquivos
    - Não converte valores escalares
"""

from copy import deepcopy
from typing import Any, Dict, Mapping

from .errors import ConfigTypeConflictError


def _as_section(value: Any) -> Any:
    # listas viram seções indexadas, como na árvore final
    if isinstance(value, list):
        return {str(i): _as_section(v) for i, v in enumerate(value)}
    if isinstance(value, Mapping):
        return {str(k): _as_section(v) for k, v in value.items()}
    return deepcopy(value)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Realiza o deep-merge determinístico de duas fontes de configuração.

    Args:
        base: Fonte de menor precedência (ex.: defaults).
        override: Fonte de maior precedência (ex.: local ou ambiente).

    Returns:
        Dict[str, Any]: Novo dicionário resultante; listas aparecem como
        seções indexadas por string.

    Raises:
        ConfigTypeConflictError: Se uma chave é seção numa fonte e
        escalar na outra, ou se as raízes não forem mapas.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise ConfigTypeConflictError(
            f"Deep-merge requer mapas no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = _as_section(base)
    folded = {k.casefold(): k for k in result}

    for raw_key, raw_value in override.items():
        key = str(raw_key)
        override_value = _as_section(raw_value)
        existing_key = folded.get(key.casefold())

        if existing_key is None:
            result[key] = override_value
            folded[key.casefold()] = key
            continue

        base_value = result[existing_key]

        # null não define forma: a outra fonte decide
        if base_value is None:
            result[existing_key] = override_value
            continue
        if override_value is None:
            if not isinstance(base_value, dict):
                result[existing_key] = None
            continue

        base_is_section = isinstance(base_value, dict)
        override_is_section = isinstance(override_value, dict)

        if base_is_section and override_is_section:
            result[existing_key] = deep_merge(base_value, override_value)
            continue

        if base_is_section != override_is_section:
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{existing_key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[existing_key] = override_value

    return result
