"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from usermgmt.util.di import instantiate_providers


def create_container() -> AsyncContainer:
    """Build the production container.

    Settings come from the environment when the config provider first runs.
    """
    return make_async_container(*instantiate_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve ``FromDishka`` from it."""
    setup_dishka(container, app)
