"""Domain enumerations for the pindown application.

Enums represent fixed sets of domain values (pin data types, block and
dataset kinds, authentication methods, guarded actions).
"""

from enum import Enum


class DataType(str, Enum):
    """Content type of a pin's raw content."""

    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"


class BlockType(str, Enum):
    """Rendering kind of a block."""

    MARKDOWN = "markdown"
    MERMAID = "mermaid"
    CONDITIONAL = "conditional"
    IMAGE = "image"
    IMAGE_STEPS = "image-steps"


class DatasetFormat(str, Enum):
    """Storage format of a dataset (stored as metadata.type)."""

    JSON = "json"
    MARKDOWN = "markdown"


class DatasetType(str, Enum):
    """Origin category of a dataset (stored as metadata.datasetType)."""

    WORKFLOW = "workflow"
    USER = "user"
    INTEGRATION = "integration"
    DOCUMENT = "document"
    RESEARCH = "research"


class AuthMethod(str, Enum):
    """How a principal was resolved."""

    TOKEN = "firebase_token"
    API_KEY = "api_key"
    DEVELOPMENT = "development"


class Action(str, Enum):
    """Action requested on a guarded resource."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class ResourceKind(str, Enum):
    """Kinds of owned resources the access guard decides on."""

    PIN = "pin"
    PINBOARD = "pinboard"

    @classmethod
    def values(cls) -> list[str]:
        """Return all resource kinds as strings."""
        return [kind.value for kind in cls]
