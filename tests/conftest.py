"""
Pytest configuration for all tests.

This file is automatically loaded by pytest and provides the in-memory
storage service every access list test runs against.
"""

import pytest

from bucket_acl.bucket import Bucket
from bucket_acl.remote.mock_storage_service import (
    MockStorageBackingStore,
    MockStorageService,
)

BUCKET_NAME = "my-bucket"


@pytest.fixture
def backing_store():
    """Backing store holding one empty bucket named BUCKET_NAME."""
    store = MockStorageBackingStore()
    store.create_bucket(BUCKET_NAME)
    return store


@pytest.fixture
def storage_service(backing_store):
    return MockStorageService(backing_store)


@pytest.fixture
def bucket(storage_service):
    return Bucket.from_service(BUCKET_NAME, storage_service)
