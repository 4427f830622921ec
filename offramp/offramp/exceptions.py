class OfframpError(Exception):
    pass


class InputRejected(ValueError):
    pass


class RateServiceError(OfframpError):
    pass


class NetworkError(RateServiceError):
    pass


class NoQuoteError(RateServiceError):
    pass


class VerificationError(OfframpError):
    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class LocaleLookupError(OfframpError):
    pass
