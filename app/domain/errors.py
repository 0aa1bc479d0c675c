# app/domain/errors.py


class ShopError(Exception):
    """Bazowy wyjatek domeny, mapowany na status HTTP w app.api.errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(ShopError):
    status_code = 400


class Unauthenticated(ShopError):
    status_code = 401


class InvalidCredential(ShopError):
    """Token wygasl, jest znieksztalcony albo ma zly podpis."""

    status_code = 401


class InvalidCredentials(ShopError):
    """Zly email lub haslo przy logowaniu (bez wskazania ktore)."""

    status_code = 401


class Forbidden(ShopError):
    status_code = 403


class NotFound(ShopError):
    status_code = 404


class InvalidState(ShopError):
    status_code = 409
