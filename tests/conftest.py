import io
from pathlib import Path

import pytest
from openpyxl import Workbook

from db import get_session
from main import create_app
from services.auth_service import issue_token
from tests import factories

EMPLOYEE_HEADER = ("FullName", "Department", "Salary")
PRODUCT_HEADER = ("Name", "Slug", "Quantity", "Category")


@pytest.fixture
def app(tmp_path):
    """Application bound to a throw-away SQLite file and upload dir."""
    app = create_app({
        "TESTING": True,
        "DB_URL": f"sqlite:///{tmp_path / 'test.sqlite'}",
        "UPLOAD_DIR": str(tmp_path / "uploads"),
        "MAIL_BACKEND": "log",
        "JWT_SECRET": "test-secret",
    })
    yield app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def session(app):
    """Session shared with the factories; closed after the test."""
    s = get_session()
    factories.bind(s)
    yield s
    factories.bind(None)
    s.close()


@pytest.fixture
def upload_dir(app):
    return Path(app.config["UPLOAD_DIR"])


@pytest.fixture
def auth_headers(app, session):
    user = factories.UserFactory(is_verified=True)
    return {"Authorization": f"Bearer {issue_token(user, app.config)}"}


def make_xlsx(rows, header=EMPLOYEE_HEADER) -> bytes:
    """Build a workbook in memory: header row then `rows`."""
    wb = Workbook()
    ws = wb.active
    if header is not None:
        ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def xlsx_file(tmp_path):
    """Write a workbook to disk and return its path (for engine-level tests)."""
    def _write(rows, header=EMPLOYEE_HEADER, name="upload.xlsx"):
        path = tmp_path / name
        path.write_bytes(make_xlsx(rows, header))
        return path
    return _write


@pytest.fixture
def upload(client):
    """POST a workbook to an import endpoint."""
    def _post(url, content: bytes, filename="data.xlsx", field="file"):
        return client.post(
            url,
            data={field: (io.BytesIO(content), filename)},
            content_type="multipart/form-data",
        )
    return _post


@pytest.fixture
def count_rows(app):
    """Row count seen by a fresh session (the request committed elsewhere)."""
    def _count(model):
        s = get_session()
        try:
            return s.query(model).count()
        finally:
            s.close()
    return _count
