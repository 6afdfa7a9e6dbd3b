"""Pydantic models for the ``alunos`` table.

``id``, ``created_at`` and ``updated_at`` are assigned by the database and
never accepted from clients, so they only appear on ``Aluno``.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AlunoInput(BaseModel):
    """Validated, normalized payload for insert and update."""
    nome: str
    idade: int
    email: str
    curso: str


class Aluno(BaseModel):
    """Full aluno record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    nome: str
    idade: int
    email: str
    curso: str
    created_at: datetime
    updated_at: datetime
