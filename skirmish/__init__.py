"""
Skirmish combat framework.

Provides turn-based combat built on top of the engine layer:
- Components (immutable Pydantic records)
- Battle (pure transition functions plus a convenience system)
- Content (schema-validated enemy and encounter data)
"""
