"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the linking rules; storage and provider access are
    injected as repositories and clients.
    """

    pass
