"""Record store adapter for the ``alunos`` table.

Issues select/insert/update/delete calls through a Supabase client and
translates PostgREST failures into the ``AlunoStoreError`` family.  The
client is injected so each request can work on its own handle.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from app.core.config import settings
from app.core.constants import (
    MSG_INSERCAO_SEM_RETORNO,
    MSG_NAO_ENCONTRADO_DETALHE,
    PG_INVALID_TEXT_REPRESENTATION,
    PG_UNIQUE_VIOLATION,
    PGRST_NO_ROWS,
)
from app.models.aluno import Aluno, AlunoInput

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class AlunoStoreError(Exception):
    """The store rejected or failed an operation."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class AlunoNotFoundError(AlunoStoreError):
    """No aluno row matches the requested id."""


class AlunoConflictError(AlunoStoreError):
    """The store's unique constraint on ``email`` was violated."""


def _translate_api_error(exc: APIError) -> AlunoStoreError:
    """Map a PostgREST ``APIError`` onto the store error hierarchy."""
    message = exc.message or str(exc)
    code = exc.code
    if code == PG_UNIQUE_VIOLATION or "duplicate key" in message:
        return AlunoConflictError(message, code)
    if code in (PGRST_NO_ROWS, PG_INVALID_TEXT_REPRESENTATION):
        return AlunoNotFoundError(message, code)
    return AlunoStoreError(message, code)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class AlunosService:
    """CRUD operations over one aluno table."""

    def __init__(self, client: Client, table: str | None = None) -> None:
        self._client = client
        self._table = table or settings.ALUNOS_TABLE

    def _execute(self, query: Any) -> list[dict[str, Any]]:
        try:
            result = query.execute()
        except APIError as exc:
            raise _translate_api_error(exc) from exc
        except httpx.HTTPError as exc:
            raise AlunoStoreError(str(exc)) from exc
        return result.data or []

    def list_all(self) -> list[Aluno]:
        """Return every aluno, newest first."""
        logger.info("Listing all alunos", extra={"operation": "list_all"})
        rows = self._execute(
            self._client.table(self._table)
            .select("*")
            .order("created_at", desc=True)
        )
        logger.info("%d alunos found", len(rows))
        return [Aluno(**row) for row in rows]

    def get_by_id(self, aluno_id: str) -> Aluno:
        """Return the aluno with *aluno_id*.

        Raises ``AlunoNotFoundError`` when no row matches.
        """
        logger.info("Fetching aluno %s", aluno_id, extra={"operation": "get_by_id"})
        rows = self._execute(
            self._client.table(self._table)
            .select("*")
            .eq("id", aluno_id)
            .limit(1)
        )
        if not rows:
            raise AlunoNotFoundError(MSG_NAO_ENCONTRADO_DETALHE.format(aluno_id=aluno_id))
        return Aluno(**rows[0])

    def insert(self, aluno: AlunoInput) -> Aluno:
        """Insert *aluno*; the store assigns ``id`` and timestamps."""
        logger.info("Creating aluno %s", aluno.nome, extra={"operation": "insert"})
        rows = self._execute(
            self._client.table(self._table).insert(aluno.model_dump())
        )
        if not rows:
            raise AlunoStoreError(MSG_INSERCAO_SEM_RETORNO)
        created = Aluno(**rows[0])
        logger.info("Aluno created: %s", created.id)
        return created

    def update(self, aluno_id: str, fields: dict[str, Any]) -> Aluno:
        """Overwrite *fields* on aluno *aluno_id* and return the new row.

        Raises ``AlunoNotFoundError`` when no row was updated.
        """
        logger.info("Updating aluno %s", aluno_id, extra={"operation": "update"})
        rows = self._execute(
            self._client.table(self._table)
            .update(fields)
            .eq("id", aluno_id)
        )
        if not rows:
            raise AlunoNotFoundError(MSG_NAO_ENCONTRADO_DETALHE.format(aluno_id=aluno_id))
        return Aluno(**rows[0])

    def delete(self, aluno_id: str) -> bool:
        """Delete aluno *aluno_id*.

        Deleting an id that does not exist is not an error.
        """
        logger.info("Deleting aluno %s", aluno_id, extra={"operation": "delete"})
        rows = self._execute(
            self._client.table(self._table)
            .delete()
            .eq("id", aluno_id)
        )
        if not rows:
            logger.warning("Delete matched no aluno: %s", aluno_id)
        return True
