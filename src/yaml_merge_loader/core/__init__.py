"""
Core do YAML Merge Loader.

Componentes principais:
    - document → parsing, localização/glob e hashing de documentos
    - merge    → TreeMerger, diretivas de import e overlays de ambiente
    - loader   → MergeLoader e Registrars
    - context  → LoadContext (eventos estruturados, warnings, recursos)
    - settings → LoaderSettings
    - errors   → hierarquia de exceções (`ConfigError`)

Princípios fundamentais:
    - Execução síncrona e recursiva, sem estado compartilhado entre chamadas externas
    - Merge funcional: documentos de entrada nunca são mutados
    - Falhas são tipadas e nomeiam o arquivo envolvido
"""
