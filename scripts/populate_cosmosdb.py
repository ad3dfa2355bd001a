"""
Cosmos DB Population Script for the Medical Appointment Booking App.

Seeds the doctor directory (the users container) with the sample accounts
using AzureCliCredential.

Usage:
    python scripts/populate_cosmosdb.py

Environment:
    COSMOS_ENDPOINT - Override the default Cosmos DB endpoint
    COSMOS_DATABASE - Override the default database name

Containers Required:
    - MedicalApp_Users  (partition: /id)
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from azure.cosmos import CosmosClient
from azure.cosmos.exceptions import CosmosHttpResponseError
from azure.identity import AzureCliCredential

from shared.cosmos_config import (
    COSMOS_ENDPOINT,
    DATABASE_NAME,
    DIRECTORY_CONTAINERS,
)
from shared.sample_directory import SAMPLE_ACCOUNTS

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def prepare_users() -> List[Dict[str, Any]]:
    """Prepare user accounts for Cosmos DB (ensure 'id' field exists)."""
    return [account.copy() for account in SAMPLE_ACCOUNTS]


def upsert_items(container, items: List[Dict[str, Any]]) -> int:
    """Upsert items into a container."""
    count = 0
    for item in items:
        try:
            container.upsert_item(item)
            count += 1
        except CosmosHttpResponseError as e:
            logger.error(f"Failed to upsert item {item.get('id')}: {e}")
    return count


def main():
    """Populate the doctor directory with sample accounts."""
    logger.info("=" * 60)
    logger.info("Medical Appointment Booking - Cosmos DB Population Script")
    logger.info("=" * 60)
    logger.info(f"Endpoint: {COSMOS_ENDPOINT}")
    logger.info(f"Database: {DATABASE_NAME}")
    logger.info("Authentication: AzureCliCredential")
    logger.info("=" * 60)

    credential = AzureCliCredential()
    client = CosmosClient(COSMOS_ENDPOINT, credential=credential)

    logger.info(f"Connecting to database '{DATABASE_NAME}'...")
    try:
        database = client.get_database_client(DATABASE_NAME)
        database.read()
        logger.info(f"Database '{DATABASE_NAME}' found")
    except CosmosHttpResponseError as e:
        logger.error(f"Database '{DATABASE_NAME}' not found or access denied: {e}")
        logger.error("Please create the database first or check RBAC permissions")
        return

    container_name, partition_key = DIRECTORY_CONTAINERS["users"]
    container = database.get_container_client(container_name)
    count = upsert_items(container, prepare_users())

    logger.info("=" * 60)
    logger.info(f"COMPLETE: {count} accounts written to {container_name} (partition: {partition_key})")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
