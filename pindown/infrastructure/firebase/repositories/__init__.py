"""Realtime Database repository implementations."""

from pindown.infrastructure.firebase.repositories.api_key_repo_firebase import (
    FirebaseApiKeyRepository,
)
from pindown.infrastructure.firebase.repositories.block_repo_firebase import (
    FirebaseBlockRepository,
)
from pindown.infrastructure.firebase.repositories.dataset_repo_firebase import (
    FirebaseDatasetRepository,
)
from pindown.infrastructure.firebase.repositories.pin_repo_firebase import (
    FirebasePinRepository,
)
from pindown.infrastructure.firebase.repositories.pinboard_repo_firebase import (
    FirebasePinboardRepository,
)
from pindown.infrastructure.firebase.repositories.user_repo_firebase import (
    FirebaseUserRepository,
)
from pindown.infrastructure.firebase.repositories.workflow_data_repo_firebase import (
    FirebaseWorkflowDataRepository,
)

__all__ = [
    "FirebaseApiKeyRepository",
    "FirebaseBlockRepository",
    "FirebaseDatasetRepository",
    "FirebasePinRepository",
    "FirebasePinboardRepository",
    "FirebaseUserRepository",
    "FirebaseWorkflowDataRepository",
]
