"""
Skirmish engine layer.

Game-agnostic building blocks used by the combat framework:
- Record: immutable Pydantic base model
- EventBus: typed publish/subscribe
- RollSource: owned, seedable randomness
- Database: schema-validated JSON content store
"""
