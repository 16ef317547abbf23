# src/polybind/core/config/tree.py
"""
Árvore canônica de configuração do Polybind.

Este módulo define o `ConfigNode`, a representação imutável e ordenada
de uma árvore de configuração hierárquica (seções chave/valor) produzida
a partir de YAML, JSON ou variáveis de ambiente.

Cada nó possui:
    - key: chave do nó dentro do pai
    - path: cadeia de chaves unidas por ":" (ex.: "List:Items:0")
    - value: valor escalar textual (apenas folhas)
    - children: sequência ordenada de nós filhos

Princípios fundamentais:
    - A árvore é imutável: o binder nunca altera nós
    - Valores escalares são sempre strings (ou ausentes)
    - Chaves são comparadas sem distinção de maiúsculas/minúsculas

Invariantes:
    - O nó raiz possui key e path vazios
    - `get_section` nunca retorna None (seções ausentes são nós vazios)
    - A ordem dos filhos reflete a ordem da fonte

Limites explícitos:
    - Não converte valores para tipos Python
    - Não lê arquivos nem ambiente (ver `loader`)
    - Não notifica mudanças
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Tuple

PATH_SEPARATOR = ":"


def join_path(*parts: str) -> str:
    return PATH_SEPARATOR.join(p for p in parts if p)


def _scalar_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class ConfigNode:
    """
    Nó imutável da árvore de configuração.

    Um nó é uma folha quando possui `value` (mesmo que vazio) e nenhum
    filho, ou uma seção quando possui filhos. Um nó sem valor e sem
    filhos representa uma seção ausente ou vazia.

    Decisões arquiteturais:
        - A busca por chave é case-insensitive, como nas fontes de
          configuração hierárquicas usuais
        - Seções ausentes são representadas por nós vazios com o path
          solicitado, permitindo diagnósticos consistentes

    Invariantes:
        - `children` é sempre uma tupla (nunca lista mutável)
        - `path` de um filho é sempre `join_path(parent.path, child.key)`
    """

    key: str = ""
    path: str = ""
    value: Optional[str] = None
    children: Tuple["ConfigNode", ...] = ()

    # -----------------------------
    # Construção
    # -----------------------------
    @classmethod
    def from_mapping(cls, data: Any, *, key: str = "", path: str = "") -> "ConfigNode":
        """
        Constrói uma árvore a partir de dados já parseados (YAML/JSON).

        Política de conversão:
            - dict   → filhos na ordem das chaves
            - list   → filhos indexados "0", "1", ...
            - bool   → "true" / "false"
            - None   → "" (valor vazio)
            - demais → str(valor)
        """
        if isinstance(data, Mapping):
            children = tuple(
                cls.from_mapping(v, key=str(k), path=join_path(path, str(k)))
                for k, v in data.items()
            )
            return cls(key=key, path=path, value=None, children=children)

        if isinstance(data, (list, tuple)):
            children = tuple(
                cls.from_mapping(v, key=str(i), path=join_path(path, str(i)))
                for i, v in enumerate(data)
            )
            return cls(key=key, path=path, value=None, children=children)

        return cls(key=key, path=path, value=_scalar_to_text(data))

    # -----------------------------
    # Navegação
    # -----------------------------
    def get_children(self) -> Tuple["ConfigNode", ...]:
        return self.children

    def has_children(self) -> bool:
        return len(self.children) > 0

    def exists(self) -> bool:
        return self.value is not None or self.has_children()

    def find(self, key: str) -> Optional["ConfigNode"]:
        """Retorna o filho direto com a chave informada (case-insensitive) ou None."""
        wanted = key.casefold()
        for child in self.children:
            if child.key.casefold() == wanted:
                return child
        return None

    def get_section(self, key: str) -> "ConfigNode":
        """
        Retorna a seção no caminho relativo informado (aceita "a:b:c").

        Seções inexistentes são retornadas como nós vazios com o path
        completo solicitado.
        """
        node: Optional[ConfigNode] = self
        current_path = self.path
        last_key = key
        for part in key.split(PATH_SEPARATOR):
            current_path = join_path(current_path, part)
            last_key = part
            node = node.find(part) if node is not None else None
        if node is None:
            return ConfigNode(key=last_key, path=current_path)
        return node

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        section = self.get_section(key)
        return section.value if section.value is not None else default

    def walk(self) -> Iterator["ConfigNode"]:
        """Percorre a árvore em pré-ordem (o próprio nó primeiro)."""
        yield self
        for child in self.children:
            yield from child.walk()
