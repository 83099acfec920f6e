"""
Kernel test configuration.

Data sources are AsyncMock stubs built against the DataSource protocol, so
tests can assert on call counts (guards and validators must never reach the
data source).
"""

from unittest.mock import AsyncMock

import pytest

from resource_lists.kernel.data_sources import DataSource
from resource_lists.kernel.orchestrator import ResourceLists
from resource_lists.kernel.store import ResourceStore


@pytest.fixture
def data_source():
    """Echoing data source: posts/patches return what they were given."""
    ds = AsyncMock(spec=DataSource)
    ds.get_resources.return_value = []
    ds.post_resource.side_effect = lambda name, resource: resource
    ds.patch_resource.side_effect = lambda name, resource: resource
    ds.delete_resource.return_value = None
    return ds


@pytest.fixture
def store():
    return ResourceStore()


@pytest.fixture
def lists(store):
    return ResourceLists(store)
