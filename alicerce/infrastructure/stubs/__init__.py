"""In-memory stubs of the engine's collaborator ports."""

from alicerce.infrastructure.stubs.demand_repository_stub import DemandRepositoryStub

__all__ = ["DemandRepositoryStub"]
