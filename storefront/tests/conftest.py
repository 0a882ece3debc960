"""Shared test fixtures for the storefront test suite."""

from unittest.mock import MagicMock

import pytest

from scraper.cache import ScrapeCache

ADMIN_SECRET = "test-admin-secret"

SHOE_HTML = """<html><head>
<meta property="og:title" content="Running Shoe">
<meta property="product:price:amount" content="89.90">
</head><body><h1>Running Shoe</h1></body></html>"""


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_response(status_code: int = 200, text: str = "", json_data=None) -> MagicMock:
    """Build a requests.Response stand-in."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = {"Content-Type": "text/html; charset=utf-8"}
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep JSONL event logs out of the repository."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr("storefront.logging_utils.LOG_DIR", log_dir)
    return log_dir


@pytest.fixture
def admin_secret(monkeypatch):
    monkeypatch.setenv("ADMIN_SECRET", ADMIN_SECRET)
    return ADMIN_SECRET


@pytest.fixture
def catalog_path(tmp_path):
    return tmp_path / "products.json"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scrape_session():
    """Mock HTTP session serving the running shoe page."""
    session = MagicMock()
    session.get.return_value = make_response(text=SHOE_HTML)
    return session


@pytest.fixture
def paypal_client():
    client = MagicMock()
    client.create_order.return_value = {"id": "ORDER-1", "status": "CREATED"}
    client.capture_order.return_value = {"id": "ORDER-1", "status": "COMPLETED"}
    return client


@pytest.fixture
def app(catalog_path, clock, scrape_session, paypal_client):
    """Create the Flask app against a temporary catalog file."""
    from storefront.app import create_app

    flask_app = create_app(
        catalog_path=catalog_path,
        scrape_cache=ScrapeCache(ttl_seconds=600, clock=clock),
        paypal_client_factory=lambda: paypal_client,
        scrape_session=scrape_session,
    )
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def catalog(app):
    return app.extensions["catalog"]
