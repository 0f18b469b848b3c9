"""
Dataset loading: decide between the on-disk cache and a fresh fetch.

A Dataset bundles everything that differs between the item mapping and the
price table (cache name, URL, decoder, refresh policy); DatasetLoader holds
the one algorithm both share.

Cache records are only ever written after the fetched bytes decode
successfully, so a bad response cannot overwrite a good cache. Failures are
never papered over with stale data: a failed fetch raises FetchFailed and a
corrupt cache raises DecodeFailed until the user forces a refresh.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Generic, Optional, TypeVar

from core.cache_store import CacheStore
from core.interfaces import ITransport
from core.refresh_policy import RefreshPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Dataset(Generic[T]):
    """A named remote JSON document with its own cache and refresh rules."""
    name: str
    url: str
    decode: Callable[[bytes], T]
    policy: RefreshPolicy


class DatasetLoader:
    """Loads datasets through a CacheStore and an ITransport."""

    def __init__(self, store: CacheStore, transport: ITransport):
        self.store = store
        self.transport = transport

    def needs_refresh(self, dataset: Dataset, force_refresh: bool = False) -> bool:
        """
        Evaluate the dataset's refresh policy against the current cache state.

        Raises:
            CacheUnreadable: If the record exists but its age cannot be read
        """
        exists = self.store.exists(dataset.name)
        age: Optional[timedelta] = None
        if exists and dataset.policy.needs_age and not force_refresh:
            age = self.store.age(dataset.name)

        refresh = dataset.policy.should_refresh(exists, age, force_refresh)
        logger.debug(
            f"{dataset.name}: exists={exists} age={age} force={force_refresh} "
            f"policy={dataset.policy!r} -> refresh={refresh}"
        )
        return refresh

    def load(self, dataset: Dataset[T], force_refresh: bool = False) -> T:
        """
        Load a dataset from cache or the network.

        Args:
            dataset: Dataset to load
            force_refresh: Ignore any cached copy

        Returns:
            The decoded dataset

        Raises:
            FetchFailed: The transport could not fetch the dataset
            DecodeFailed: The response or the cached copy is malformed
            CacheWriteFailed: The fetched dataset could not be cached
            CacheUnreadable: The cached copy exists but cannot be read
        """
        if self.needs_refresh(dataset, force_refresh):
            return self._refresh(dataset)

        logger.info(f"Using cached {dataset.name} from {self.store.path_for(dataset.name)}")
        raw = self.store.read(dataset.name)
        return dataset.decode(raw)

    def _refresh(self, dataset: Dataset[T]) -> T:
        logger.info(f"Fetching {dataset.name} from {dataset.url}")
        raw = self.transport.fetch(dataset.url)

        # Decode before writing so a malformed body never replaces the cache
        value = dataset.decode(raw)

        # Persist the bytes as received, not a re-serialization of value
        self.store.write(dataset.name, raw)
        return value
