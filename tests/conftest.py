import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client() -> TestClient:
    from markdown_to_word.main import app

    return TestClient(app)


@pytest.fixture(autouse=True)
def store(tmp_path):
    # Fresh session store per test, writing under a temp dir.
    from markdown_to_word.main import app
    from markdown_to_word.services.document_store import DocumentStore

    previous = app.state.store
    app.state.store = DocumentStore(output_dir=tmp_path)
    yield app.state.store
    app.state.store = previous
