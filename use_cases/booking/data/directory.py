"""
Doctor Directory Services.

The directory is the remote source of doctor accounts. The booking core
only consumes it: get_all_doctors() may fail, resolve_local() never does
and answers from whatever the service can still reach without the network.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Union

from azure.core.exceptions import AzureError
from azure.cosmos import CosmosClient
from azure.identity import DefaultAzureCredential
from pydantic import ValidationError as PydanticValidationError

from core.domain import DirectoryUnavailable
from shared.cosmos_config import (
    COSMOS_ENDPOINT,
    DATABASE_NAME,
    get_directory_container_name,
)
from shared.sample_directory import sample_doctors

from ..domain.models import AccountRecord, AccountRole

logger = logging.getLogger(__name__)

RecordLike = Union[AccountRecord, Dict[str, Any]]


def to_account_records(items: Iterable[RecordLike]) -> List[AccountRecord]:
    """Parse raw documents into account records, skipping malformed ones."""
    records = []
    for item in items:
        if isinstance(item, AccountRecord):
            records.append(item)
            continue
        try:
            records.append(AccountRecord.model_validate(item))
        except PydanticValidationError as e:
            logger.warning(f"Skipping malformed account record {item.get('id')!r}: {e}")
    return records


class DirectoryService(ABC):
    """Abstract source of doctor account records."""

    @abstractmethod
    async def get_all_doctors(self) -> List[AccountRecord]:
        """
        Fetch every doctor account.

        Raises:
            DirectoryUnavailable: If the directory cannot be reached
        """
        pass

    def resolve_local(self) -> List[AccountRecord]:
        """
        Answer without touching the network. Never raises.

        Default implementation knows nothing locally.
        """
        return []


class StaticDirectoryService(DirectoryService):
    """Serves a fixed list of accounts (local mode and tests)."""

    def __init__(self, records: Optional[Iterable[RecordLike]] = None):
        self._records = to_account_records(records if records is not None else sample_doctors())

    async def get_all_doctors(self) -> List[AccountRecord]:
        return [r for r in self._records if r.is_doctor]

    def resolve_local(self) -> List[AccountRecord]:
        return [r for r in self._records if r.is_doctor]


class CosmosDirectoryService(DirectoryService):
    """
    Doctor directory stored in Azure Cosmos DB.

    The Cosmos client is created on first use so constructing the service
    never touches the network. The last successful answer is cached and
    served by resolve_local(), falling back to the bundled sample doctors.
    """

    def __init__(
        self,
        endpoint: str = COSMOS_ENDPOINT,
        database_name: str = DATABASE_NAME,
        container_name: str = get_directory_container_name("users"),
        fallback: Optional[Iterable[RecordLike]] = None,
    ):
        """
        Initialize the Cosmos directory.

        Args:
            endpoint: Cosmos DB endpoint URL
            database_name: Database name
            container_name: Container holding user accounts
            fallback: Records served locally before any successful fetch
        """
        self.endpoint = endpoint
        self.database_name = database_name
        self.container_name = container_name
        self._fallback = to_account_records(fallback if fallback is not None else sample_doctors())
        self._container = None
        self._cache: Optional[List[AccountRecord]] = None

    def _get_container(self):
        """Get the container client, creating the Cosmos client on first use."""
        if self._container is None:
            logger.info("Initializing directory Cosmos DB client...")
            credential = DefaultAzureCredential(
                exclude_interactive_browser_credential=True,
            )
            client = CosmosClient(self.endpoint, credential=credential)
            database = client.get_database_client(self.database_name)
            self._container = database.get_container_client(self.container_name)
            logger.info(f"Directory Cosmos DB client initialized: {self.database_name}/{self.container_name}")
        return self._container

    def _query_doctors(self) -> List[Dict[str, Any]]:
        container = self._get_container()
        query = "SELECT * FROM c WHERE c.role = @role"
        params = [{"name": "@role", "value": AccountRole.DOCTOR.value}]
        return list(container.query_items(query, parameters=params, enable_cross_partition_query=True))

    async def get_all_doctors(self) -> List[AccountRecord]:
        try:
            documents = await asyncio.to_thread(self._query_doctors)
        except AzureError as e:
            raise DirectoryUnavailable(f"Doctor directory unavailable: {e}") from e

        records = to_account_records(documents)
        self._cache = records
        logger.info(f"Loaded {len(records)} doctors from Cosmos DB")
        return list(records)

    def resolve_local(self) -> List[AccountRecord]:
        if self._cache is not None:
            return list(self._cache)
        return list(self._fallback)
