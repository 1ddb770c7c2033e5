# src/atlas_laundry/core/__init__.py
"""
Core do Atlas Laundry.

Este pacote contém a implementação canônica do agendamento, da resolução
de cadeias de dependência e da execução de pipelines de jobs.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de UI ou CLI
    - orientado a contratos explícitos (conectores e store)

Componentes principais:
    - config       → resolução de configuração (merge, validação estrutural, hashing)
    - jobs         → modelo de Job, agendas, registry e ciclo de vida
    - connectors   → capacidades, schema de settings e catálogo de tipos
    - settings     → herança de settings e entrada de campos
    - engine       → cadeias, gatilhos, executor e scheduler
    - traceability → registro de execução por job

Limites explícitos:
    - Não define conectores concretos de serviços
    - Não depende de terminal, prompts ou CLI
"""
