"""Aluno payload validation.

Checks the four user-settable fields of an untrusted payload against a
declarative rule table.  Every field is checked independently and all
violations are collected before returning, so clients can fix the whole
form in one round trip.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from app.core.constants import (
    CURSO_MAX_LENGTH,
    EMAIL_PATTERN,
    IDADE_MAX,
    IDADE_MIN,
    MSG_CURSO_OBRIGATORIO,
    MSG_CURSO_TAMANHO,
    MSG_EMAIL_INVALIDO,
    MSG_EMAIL_OBRIGATORIO,
    MSG_IDADE_FAIXA,
    MSG_IDADE_OBRIGATORIA,
    MSG_NOME_OBRIGATORIO,
    MSG_NOME_TAMANHO,
    NOME_MAX_LENGTH,
)
from app.models.aluno import AlunoInput
from app.models.response import FieldError


class AlunoValidationError(Exception):
    """Raised when a payload violates one or more field rules."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class _FieldInvalid(Exception):
    """Internal signal carrying the message for one failed field."""


# A checker receives the raw value and returns the normalized one, or raises
# ``_FieldInvalid`` with the user-facing message.
Checker = Callable[[Any], Any]


def _text(required_msg: str, max_length: int, length_msg: str) -> Checker:
    def check(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise _FieldInvalid(required_msg)
        trimmed = value.strip()
        if len(trimmed) > max_length:
            raise _FieldInvalid(length_msg)
        return trimmed

    return check


def _check_idade(value: Any) -> int:
    # bool is a subclass of int but never a valid age
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _FieldInvalid(MSG_IDADE_OBRIGATORIA)
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise _FieldInvalid(MSG_IDADE_OBRIGATORIA)
        value = int(value)
    if value < IDADE_MIN or value > IDADE_MAX:
        raise _FieldInvalid(MSG_IDADE_FAIXA)
    return value


def _check_email(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise _FieldInvalid(MSG_EMAIL_OBRIGATORIO)
    trimmed = value.strip()
    if EMAIL_PATTERN.fullmatch(trimmed) is None:
        raise _FieldInvalid(MSG_EMAIL_INVALIDO)
    return trimmed.lower()


ALUNO_RULES: tuple[tuple[str, Checker], ...] = (
    ("nome", _text(MSG_NOME_OBRIGATORIO, NOME_MAX_LENGTH, MSG_NOME_TAMANHO)),
    ("idade", _check_idade),
    ("email", _check_email),
    ("curso", _text(MSG_CURSO_OBRIGATORIO, CURSO_MAX_LENGTH, MSG_CURSO_TAMANHO)),
)


def validate_aluno(raw: Any) -> AlunoInput:
    """Validate and normalize an aluno payload.

    Parameters
    ----------
    raw:
        Decoded JSON body of any shape.  Anything other than an object is
        treated as an empty object.

    Returns
    -------
    ``AlunoInput`` with ``nome``/``curso`` trimmed and ``email`` trimmed and
    lowercased.

    Raises
    ------
    AlunoValidationError
        With one ``FieldError`` per failing field, in field order.
    """
    payload: dict[str, Any] = raw if isinstance(raw, dict) else {}

    errors: list[FieldError] = []
    normalized: dict[str, Any] = {}

    for field, check in ALUNO_RULES:
        try:
            normalized[field] = check(payload.get(field))
        except _FieldInvalid as exc:
            errors.append(FieldError(field=field, message=str(exc)))

    if errors:
        raise AlunoValidationError(errors)

    return AlunoInput(**normalized)
