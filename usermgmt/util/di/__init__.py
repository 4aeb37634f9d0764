"""Dependency injection module.

Every provider base in ``PROVIDERS`` resolves to one concrete class. Bases
without subclasses are used as they are; a base with subclasses is a
mockable component and picks the subclass whose ``__is_mock__`` matches.
"""

from typing import Type

from usermgmt.util.di.application import ProdApplicationProvider
from usermgmt.util.di.base import Component, ProviderBase
from usermgmt.util.di.core import ProdConfigProvider
from usermgmt.util.di.domain import ProdDomainProvider
from usermgmt.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,  # mockable
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation loaded."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ is not None
        and any(c.__is_mock__ for c in base.__subclasses__())
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class for a base.

    Raises:
        ValueError: If the base has no implementation of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


def instantiate_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate one provider per base, using mocks for ``mocked`` components."""
    mocked = mocked or set()
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "instantiate_providers",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
