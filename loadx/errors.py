"""
Validation failures raised by the services.

Every failure carries a stable ``kind`` (used by the JSON error handler) and a
user-facing message in Portuguese, the language of the app's users.
Services validate before they mutate, so a raised error never leaves a
half-applied change behind.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ValidationError(Exception):
    kind = "ValidationError"
    status_code = 400
    default_message = "Dados inválidos."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "message": self.message}


class MissingField(ValidationError):
    kind = "MissingField"
    default_message = "Preencha todos os campos."


class WeakPassword(ValidationError):
    kind = "WeakPassword"
    default_message = (
        "A senha deve ser forte: mínimo 8 caracteres, maiúsculas, "
        "minúsculas, números e símbolos."
    )


class PasswordMismatch(ValidationError):
    kind = "PasswordMismatch"
    default_message = "As senhas não coincidem."


class DuplicateEmail(ValidationError):
    kind = "DuplicateEmail"
    default_message = "Este e-mail já está cadastrado."


class InvalidCredentials(ValidationError):
    kind = "InvalidCredentials"
    status_code = 401
    default_message = "E-mail ou senha incorretos."


class StudentNotFound(ValidationError):
    kind = "StudentNotFound"
    default_message = "Aluno não encontrado com este número de série."


class DuplicateStudent(ValidationError):
    kind = "DuplicateStudent"
    default_message = "Este aluno já está cadastrado."


class MissingDataOrEmptyList(ValidationError):
    kind = "MissingDataOrEmptyList"
    default_message = "Preencha todos os dados e adicione pelo menos um exercício."


class UnknownSubModule(ValidationError):
    kind = "UnknownSubModule"
    default_message = "Módulo de treino desconhecido."


class NoPendingAction(ValidationError):
    kind = "NoPendingAction"
    default_message = "Nenhuma ação pendente para confirmar."


class NotAuthenticated(ValidationError):
    kind = "NotAuthenticated"
    status_code = 401
    default_message = "Faça login para continuar."


class Forbidden(ValidationError):
    kind = "Forbidden"
    status_code = 403
    default_message = "Ação não permitida para este perfil."
