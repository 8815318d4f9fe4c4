class CurrencyException(Exception):
    pass


class FetchError(CurrencyException):
    """Upstream rates could not be fetched or deserialized."""


class AppError(CurrencyException):
    pass
