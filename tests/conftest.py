import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
TESTS = Path(__file__).resolve().parent
for path in (ROOT, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('API_LOGIN_ID', 'test-login')
os.environ.setdefault('TRANSACTION_KEY', 'test-transaction-key')
os.environ.setdefault('AUTHORIZE_NET_ENV', 'sandbox')
os.environ.setdefault('FRONTEND_URL', 'https://admin.example.com')

from vendor_payloads import FakeClient  # noqa: E402


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def service(fake_client):
    from app.config import get_settings
    from app.services.authorize_net_service import AuthorizeNetService

    return AuthorizeNetService(fake_client, get_settings())
