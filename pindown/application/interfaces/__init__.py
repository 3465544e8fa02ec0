"""Ports: repository and service protocols implemented by infrastructure."""

from pindown.application.interfaces.repositories import (
    IApiKeyRepository,
    IBlockRepository,
    IDatasetRepository,
    IPinboardRepository,
    IPinRepository,
    IUserRepository,
    IWorkflowDataRepository,
)
from pindown.application.interfaces.services import (
    IDocumentStore,
    IIdentityVerifier,
    IIdGenerator,
    IdentityVerificationError,
)

__all__ = [
    "IApiKeyRepository",
    "IBlockRepository",
    "IDatasetRepository",
    "IDocumentStore",
    "IIdGenerator",
    "IIdentityVerifier",
    "IdentityVerificationError",
    "IPinRepository",
    "IPinboardRepository",
    "IUserRepository",
    "IWorkflowDataRepository",
]
