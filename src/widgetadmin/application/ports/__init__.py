"""Application ports - interfaces for external adapters."""

from widgetadmin.application.ports.principal_fetcher import PrincipalFetcher
from widgetadmin.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PrincipalFetcher",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
