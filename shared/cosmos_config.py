"""
Azure Cosmos DB Configuration.

Centralized configuration for the Cosmos DB account that backs the doctor
directory. Keeps the application, scripts, and seeding tools consistent.

Environment Variables (optional overrides):
    COSMOS_ENDPOINT - Override the default Cosmos DB endpoint
    COSMOS_DATABASE - Override the default database name
"""

import os

# =============================================================================
# COSMOS DB CONNECTION
# =============================================================================

COSMOS_ENDPOINT = os.getenv(
    "COSMOS_ENDPOINT",
    "https://medicalapp-nosql-db.documents.azure.com:443/"
)

DATABASE_NAME = os.getenv(
    "COSMOS_DATABASE",
    "medicalapp"
)

# =============================================================================
# DIRECTORY CONTAINERS
# =============================================================================

# Format: logical_name -> (container_name, partition_key_path)
DIRECTORY_CONTAINERS = {
    "users": ("MedicalApp_Users", "/id"),
}

# Simple container name lookup (without partition key)
DIRECTORY_CONTAINER_NAMES = {
    key: name for key, (name, _) in DIRECTORY_CONTAINERS.items()
}

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_directory_container_name(logical_name: str) -> str:
    """Get the actual container name for a logical directory container name."""
    if logical_name in DIRECTORY_CONTAINER_NAMES:
        return DIRECTORY_CONTAINER_NAMES[logical_name]
    return logical_name

