"""
mfe_registry.api.models

Shared base for request/response models.

Responsibilities:
- Keep snake_case attribute names in Python while the wire format stays camelCase,
  as the shell (TypeScript) expects.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
