"""Aluno request handling.

``AlunosController`` runs validation and the store adapter for each CRUD
action and shapes every outcome, success or failure, into an
``ApiResponse`` envelope.  Expected failures never propagate past this
layer.
"""

from __future__ import annotations

import logging
from typing import Any

from app.core.constants import (
    MSG_ATUALIZADO,
    MSG_CADASTRADO,
    MSG_DADOS_INVALIDOS,
    MSG_DELETADO,
    MSG_EMAIL_DUPLICADO,
    MSG_EMAIL_DUPLICADO_DETALHE,
    MSG_ENCONTRADO,
    MSG_ERRO_ATUALIZAR,
    MSG_ERRO_BUSCAR,
    MSG_ERRO_CADASTRAR,
    MSG_ERRO_DELETAR,
    MSG_ERRO_LISTAR,
    MSG_ID_OBRIGATORIO,
    MSG_LISTADOS,
    MSG_NAO_ENCONTRADO,
)
from app.models.response import ApiResponse
from app.services.alunos import (
    AlunoConflictError,
    AlunoNotFoundError,
    AlunosService,
    AlunoStoreError,
)
from app.services.validation import AlunoValidationError, validate_aluno

logger = logging.getLogger(__name__)


def _missing_id() -> ApiResponse:
    return ApiResponse(success=False, message=MSG_ID_OBRIGATORIO)


def _invalid(exc: AlunoValidationError) -> ApiResponse:
    return ApiResponse(success=False, message=MSG_DADOS_INVALIDOS, errors=exc.errors)


def _not_found(exc: AlunoNotFoundError) -> ApiResponse:
    return ApiResponse(success=False, message=MSG_NAO_ENCONTRADO, error=exc.message)


def _duplicate_email() -> ApiResponse:
    return ApiResponse(
        success=False,
        message=MSG_EMAIL_DUPLICADO,
        error=MSG_EMAIL_DUPLICADO_DETALHE,
    )


def _store_failure(message: str, exc: AlunoStoreError) -> ApiResponse:
    return ApiResponse(success=False, message=message, error=exc.message)


class AlunosController:
    """One method per CRUD action, each returning an ``ApiResponse``."""

    def __init__(self, service: AlunosService) -> None:
        self.service = service

    def listar(self) -> ApiResponse:
        try:
            alunos = self.service.list_all()
        except AlunoStoreError as exc:
            logger.error("Failed to list alunos: %s", exc.message)
            return _store_failure(MSG_ERRO_LISTAR, exc)
        return ApiResponse(
            success=True,
            message=MSG_LISTADOS,
            data=alunos,
            total=len(alunos),
        )

    def buscar(self, aluno_id: str | None) -> ApiResponse:
        if not aluno_id:
            return _missing_id()
        try:
            aluno = self.service.get_by_id(aluno_id)
        except AlunoNotFoundError as exc:
            return _not_found(exc)
        except AlunoStoreError as exc:
            logger.error("Failed to fetch aluno %s: %s", aluno_id, exc.message)
            return _store_failure(MSG_ERRO_BUSCAR, exc)
        return ApiResponse(success=True, message=MSG_ENCONTRADO, data=aluno)

    def criar(self, body: Any) -> ApiResponse:
        try:
            aluno_input = validate_aluno(body)
        except AlunoValidationError as exc:
            return _invalid(exc)
        try:
            aluno = self.service.insert(aluno_input)
        except AlunoConflictError:
            logger.warning("Duplicate email on create: %s", aluno_input.email)
            return _duplicate_email()
        except AlunoStoreError as exc:
            logger.error("Failed to create aluno: %s", exc.message)
            return _store_failure(MSG_ERRO_CADASTRAR, exc)
        return ApiResponse(success=True, message=MSG_CADASTRADO, data=aluno)

    def atualizar(self, aluno_id: str | None, body: Any) -> ApiResponse:
        """Replace all user-settable fields of an aluno.

        PUT and PATCH both land here; the body is validated as a complete
        record either way.
        """
        if not aluno_id:
            return _missing_id()
        try:
            aluno_input = validate_aluno(body)
        except AlunoValidationError as exc:
            return _invalid(exc)
        try:
            aluno = self.service.update(aluno_id, aluno_input.model_dump())
        except AlunoConflictError:
            logger.warning("Duplicate email on update of %s", aluno_id)
            return _duplicate_email()
        except AlunoNotFoundError as exc:
            return _not_found(exc)
        except AlunoStoreError as exc:
            logger.error("Failed to update aluno %s: %s", aluno_id, exc.message)
            return _store_failure(MSG_ERRO_ATUALIZAR, exc)
        return ApiResponse(success=True, message=MSG_ATUALIZADO, data=aluno)

    def deletar(self, aluno_id: str | None) -> ApiResponse:
        if not aluno_id:
            return _missing_id()
        try:
            self.service.delete(aluno_id)
        except AlunoNotFoundError:
            # A malformed id cannot match a row; treated like any absent id
            logger.warning("Delete of unknown aluno id: %s", aluno_id)
        except AlunoStoreError as exc:
            logger.error("Failed to delete aluno %s: %s", aluno_id, exc.message)
            return _store_failure(MSG_ERRO_DELETAR, exc)
        return ApiResponse(success=True, message=MSG_DELETADO)
