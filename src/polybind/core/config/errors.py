# src/polybind/core/config/errors.py
"""
Exceções canônicas da camada de fontes de configuração do Polybind.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento de arquivos, leitura do ambiente e deep-merge das fontes
que compõem a árvore de configuração (`ConfigNode`).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de fonte são falhas fatais
    - Mensagens de erro indicam o arquivo ou a chave envolvida

Invariantes:
    - Todas as exceções de fonte herdam de `ConfigError`
    - Nenhuma exceção daqui representa erro de binding (ver
      `polybind.core.binding.errors`)

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do engine de binding
"""


class ConfigError(Exception):
    """
    Exceção base para erros de fontes de configuração.

    Permite captura genérica de falhas de carregamento e merge, distinta
    das falhas de binding levantadas pelo engine.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo base (defaults) não existe.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - O arquivo local de overrides é opcional e nunca gera este erro
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando a extensão do arquivo não é suportada.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando a raiz de uma fonte não é um mapa chave-valor.

    Listas ou escalares na raiz não podem formar seções nomeadas.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando duas fontes discordam sobre a forma de uma chave.

    Exemplo de conflito:
        - base:     {"List": {"Items": [...]}}
        - override: {"List": "texto"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
