import pytest

from rest_framework.test import APIClient

from modules.products.constants import ID_TRACKER_PK, ID_TRACKER_SEED
from modules.products.models import ProductIdTracker


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def id_tracker():
    """The provisioned id tracker, reset to its seed value."""
    tracker, _ = ProductIdTracker.objects.update_or_create(
        pk=ID_TRACKER_PK, defaults={"last_id": ID_TRACKER_SEED}
    )
    return tracker


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
