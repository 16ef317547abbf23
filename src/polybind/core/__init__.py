# src/polybind/core/__init__.py
"""
Core do Polybind.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de frameworks de aplicação (HTTP, DI, hosting)

Componentes principais:
    - config  → fontes de configuração e árvore `ConfigNode`
    - binding → engine recursivo, descritores, registry e erros tipados
    - options → catálogo de opções nomeadas (interface de leitura)
"""
