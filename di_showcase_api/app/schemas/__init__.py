"""
Pydantic schema definitions for API payloads.

Each example defines its own request and response models.  Schemas are
kept separate from the services so the API representation stays
decoupled from storage.
"""
