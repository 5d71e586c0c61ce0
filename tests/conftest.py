import os

# mongolink.main builds the default manager at import; give it a URI.
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from mongolink.main import app  # noqa: E402


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
