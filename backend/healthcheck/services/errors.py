class ServiceError(Exception):
    """Base class for failures raised by the account and history services."""


class StoreUnavailable(ServiceError):
    pass


class AuthenticationFailed(ServiceError):
    pass


class RegistrationFailed(ServiceError):
    pass


class EntryNotFound(ServiceError):
    pass
