"""Prefixed id generation for stored entities.

Pins, blocks, datasets and pinboards use store push keys (chronologically
sortable) behind a one-letter prefix; API key ids use CUID2.
"""

from pindown.application.interfaces.services import IDocumentStore
from pindown.shared.utils.generators import generate_cuid

PIN_PREFIX = "p"
BLOCK_PREFIX = "b"
DATASET_PREFIX = "d"
PINBOARD_PREFIX = "pb-"
API_KEY_PREFIX = "key_"


class IdGenerator:
    """Implements IIdGenerator on top of the store's push keys."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def pin_id(self) -> str:
        return f"{PIN_PREFIX}{self._store.push_key()}"

    def block_id(self) -> str:
        return f"{BLOCK_PREFIX}{self._store.push_key()}"

    def dataset_id(self) -> str:
        return f"{DATASET_PREFIX}{self._store.push_key()}"

    def pinboard_id(self) -> str:
        return f"{PINBOARD_PREFIX}{self._store.push_key()}"

    def api_key_id(self) -> str:
        return f"{API_KEY_PREFIX}{generate_cuid()}"
