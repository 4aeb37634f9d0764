"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates. They hold
    nothing but their injected repositories and settings.
    """

    pass
