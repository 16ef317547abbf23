# src/polybind/core/config/loader.py
"""
Loader canônico de fontes de configuração do Polybind.

Este módulo carrega as fontes textuais de configuração e as materializa
como uma árvore `ConfigNode` pronta para o binding.

A árvore é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)
    - variáveis de ambiente com prefixo (opcional)

Responsabilidades do módulo:
    - Carregar arquivos YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Ler variáveis de ambiente hierárquicas ("__" como separador)
    - Resolver as fontes via deep-merge com precedência explícita

Invariantes:
    - O arquivo de defaults é obrigatório
    - Precedência: ambiente > local > defaults
    - Nenhum I/O acontece durante o binding; a árvore já chega materializada

Limites explícitos:
    - Não converte valores para tipos Python
    - Não monitora arquivos nem recarrega automaticamente
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .tree import ConfigNode

logger = logging.getLogger(__name__)

ENV_SEPARATOR = "__"


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - Arquivos vazios são interpretados como mapas vazios
        - O conteúdo raiz deve ser um mapa

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um mapa.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            text = f.read()
        data = json.loads(text) if text.strip() else None

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Raiz da configuração deve ser um mapa, recebido: {type(data).__name__}"
        )

    logger.debug("fonte de configuração carregada: %s (%d chaves)", path, len(data))
    return data


def load_environ(prefix: str = "", environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Lê variáveis de ambiente como uma fonte hierárquica.

    Apenas variáveis iniciadas por `prefix` (case-insensitive) são lidas;
    o prefixo é removido e "__" separa os níveis da hierarquia.

    Exemplo:
        APP_List__Items__0___Type=derived1 → {"List": {"Items": {"0": {"_Type": "derived1"}}}}
    """
    source = os.environ if environ is None else environ
    folded_prefix = prefix.casefold()
    result: Dict[str, Any] = {}

    for name, value in source.items():
        if not name.casefold().startswith(folded_prefix):
            continue
        parts = [p for p in name[len(prefix):].split(ENV_SEPARATOR) if p]
        if not parts:
            continue

        cursor = result
        for part in parts[:-1]:
            nested = cursor.get(part)
            if not isinstance(nested, dict):
                nested = {}
                cursor[part] = nested
            cursor = nested
        cursor[parts[-1]] = value

    return result


def load_config_tree(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
    env_prefix: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigNode:
    """
    Carrega e resolve a árvore de configuração efetiva.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; quando ausente é ignorado
        - Variáveis de ambiente só são lidas quando `env_prefix` é informado
        - Fontes posteriores têm precedência via `deep_merge`

    Args:
        defaults_path: Caminho do arquivo base.
        local_path: Caminho opcional de overrides locais.
        env_prefix: Prefixo opcional das variáveis de ambiente.
        environ: Mapa de ambiente alternativo (testes).

    Returns:
        ConfigNode: Raiz da árvore resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se uma raiz não for um mapa.
        ConfigTypeConflictError: Se houver conflito estrutural no merge.
    """
    effective: Dict[str, Any] = deep_merge({}, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))
        else:
            logger.debug("arquivo local ausente, ignorado: %s", local_file)

    if env_prefix is not None:
        effective = deep_merge(effective, load_environ(env_prefix, environ))

    return ConfigNode.from_mapping(effective)
