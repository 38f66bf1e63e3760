"""API-layer dependencies: request-scoped wiring (UoW)."""

from app.api.dependencies.unit_of_work import UnitOfWork, get_uow

__all__ = ["UnitOfWork", "get_uow"]
