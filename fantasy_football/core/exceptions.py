"""Hierarquia de erros da aplicação.

Árvore de exceções:
    AppError
    +-- ValidationError        (400, entrada malformada ou fora de faixa)
    |   +-- TeamIdRequired
    +-- AuthenticationFailed   (401, credencial ausente ou inválida)
    +-- Unauthorized           (403, papel insuficiente)
    +-- NotFound               (404, entidade referenciada ausente)
    |   +-- InvalidId / InvalidPlayerId / InvalidTeamId / InvalidUserId
    |   +-- PlayerNotTransferable
    +-- Conflict               (409, violação de invariante de unicidade)
    |   +-- PlayerAlreadyRostered / PlayerAlreadyListed
    |   +-- EmailAlreadyRegistered / ConcurrentModification
    +-- InsufficientFunds      (422, regra de negócio)

Cada erro carrega um código estável (``code``), o status HTTP e uma
mensagem legível. O handler em ``main.py`` converte tudo no envelope
``{statusCode, error, message}``.
"""
from typing import Optional


class AppError(Exception):
    """Erro base com código de máquina e status HTTP."""

    status_code: int = 400
    code: str = "BAD_REQUEST"
    default_message: str = "Requisição inválida"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None):
        if code:
            self.code = code
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {
            "statusCode": self.status_code,
            "error": self.code,
            "message": self.message,
        }


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Dados inválidos"


class TeamIdRequired(ValidationError):
    code = "TEAM_ID_REQUIRED"
    default_message = "destinationTeamId é obrigatório para administradores"


class AuthenticationFailed(AppError):
    status_code = 401
    code = "AUTHENTICATION_FAILED"
    default_message = "Falha na autenticação"


class InvalidCredentials(AuthenticationFailed):
    code = "INVALID_CREDENTIALS"
    default_message = "Email ou senha incorretos"


class InvalidRefreshToken(AuthenticationFailed):
    code = "INVALID_REFRESH_TOKEN"
    default_message = "Refresh token inválido ou expirado"


class Unauthorized(AppError):
    status_code = 403
    code = "UNAUTHORIZED"
    default_message = "Você não tem permissão para esta operação"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Registro não encontrado"


class InvalidId(NotFound):
    code = "INVALID_ID"
    default_message = "Id inválido"


class InvalidPlayerId(NotFound):
    code = "INVALID_PLAYER_ID"
    default_message = "Jogador não encontrado"


class InvalidTeamId(NotFound):
    code = "INVALID_TEAM_ID"
    default_message = "Time não encontrado"


class InvalidUserId(NotFound):
    code = "INVALID_USER_ID"
    default_message = "Usuário não encontrado"


class InvalidEmail(ValidationError):
    code = "INVALID_EMAIL"
    default_message = "Email não cadastrado"


class PlayerNotTransferable(NotFound):
    code = "PLAYER_NOT_TRANSFERABLE"
    default_message = "Jogador não está disponível no mercado"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Conflito com o estado atual"


class PlayerAlreadyRostered(Conflict):
    code = "PLAYER_ALREADY_ROSTERED"
    default_message = "Jogador já pertence a outro time"


class PlayerAlreadyListed(Conflict):
    code = "PLAYER_ALREADY_LISTED"
    default_message = "Jogador já está no mercado de transferências"


class EmailAlreadyRegistered(Conflict):
    code = "EMAIL_ALREADY_REGISTERED"
    default_message = "Email já cadastrado"


class ConcurrentModification(Conflict):
    code = "CONCURRENT_MODIFICATION"
    default_message = "Registro alterado por outra requisição, tente novamente"


class InsufficientFunds(AppError):
    status_code = 422
    code = "INSUFFICIENT_FUNDS"
    default_message = "Saldo insuficiente para a transferência"
