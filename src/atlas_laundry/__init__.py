# src/atlas_laundry/__init__.py
"""
Atlas Laundry: orquestrador de jobs de "lavagem" de dados entre conectores.

Este pacote raiz define o namespace público do Atlas Laundry. Cada job
combina um conector de entrada (fonte) com um conector de saída (destino)
e é executado sob demanda ou por um gatilho recorrente.

Princípios centrais:
    - A execução é sequencial, em um único processo e uma única thread
    - A falha de um job nunca interrompe o restante do lote
    - Todo job concluído com sucesso é persistido imediatamente
    - Dependências entre jobs ("rodar depois de") são explícitas

Arquitetura em alto nível:
    - core.config       → carregamento, merge e hashing de configuração
    - core.jobs         → Job, agendas, registry e ciclo de vida
    - core.connectors   → contratos de conectores e catálogo de tipos
    - core.settings     → herança de settings e máquina de entrada de campos
    - core.engine       → cadeias, gatilhos, executor e scheduler
    - core.traceability → registro forense de cada execução de job
    - persistence       → JobStore (YAML/JSON) e artefatos por job
    - connectors        → conectores embutidos (arquivos)
    - console_ui        → wizard, renderização e CLI

Limites explícitos:
    - Não implementa retries, rate limiting nem execução distribuída
    - Não contém conectores de serviços HTTP específicos
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
