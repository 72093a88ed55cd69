from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class InvalidPlanError(DomainError):
    """Combinacao de plano e intervalo nao existe no catalogo."""


class SubscriptionCreationError(DomainError):
    """Gateway nao conseguiu criar a assinatura."""


class IdempotencyConflictError(DomainError):
    """Chave de idempotencia reutilizada com parametros diferentes."""


class MalformedCallbackError(DomainError):
    """Callback de pagamento sem os campos obrigatorios."""


class SignatureMismatchError(DomainError):
    """Assinatura do callback nao confere."""


class UpstreamUnavailableError(DomainError):
    """Servico externo indisponivel ou resposta invalida."""


class NoActiveSubscriptionError(DomainError):
    """Cliente nao possui assinatura ativa no gateway."""


class InvalidCredentialsError(DomainError):
    """Credenciais recusadas pelo backend de planilhas."""
