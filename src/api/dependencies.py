"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the registry
service and the calling principal into routes, and the factory that
wires the registry together from settings.
"""

from fastapi import Header, Request

from src.adapters.clock.logical import IntervalClock
from src.adapters.ledger.console import ConsoleLedger
from src.config.settings import Settings
from src.domain.authority import AuthorityGate
from src.domain.ports import Clock, Ledger
from src.domain.registry import RegistryService


def build_registry(
    settings: Settings,
    ledger: Ledger | None = None,
    clock: Clock | None = None,
) -> RegistryService:
    """
    Create a registry service with policy defaults from settings.

    Falls back to the console ledger and an interval clock when no
    collaborators are supplied.
    """
    gate = AuthorityGate(
        max_identities=settings.max_identities,
        creation_fee=settings.creation_fee,
        burn_principal=settings.burn_principal,
    )
    return RegistryService(
        ledger=ledger if ledger is not None else ConsoleLedger(),
        clock=clock
        if clock is not None
        else IntervalClock(
            settings.block_interval_seconds, genesis_height=settings.genesis_height
        ),
        gate=gate,
    )


def get_registry(request: Request) -> RegistryService:
    """
    Get the registry service from app state.

    The registry is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.registry


def get_caller(x_caller: str = Header(..., min_length=1)) -> str:
    """
    Extract the calling principal from the X-Caller header.

    The principal is authenticated upstream; the registry only compares it
    for equality against stored creators and the authority.
    """
    return x_caller
