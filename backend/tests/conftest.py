"""
Shared fixtures: sample chunks, a fresh document store, text files and an API client.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from docsift.chunking.models import Chunk
from docsift.documents.store import InMemoryDocumentStore
from docsift.settings import settings


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def sample_chunks() -> list[Chunk]:
    texts = [
        "Photosynthesis converts light energy into chemical energy in plants.",
        "The mitochondria is the powerhouse of the cell and produces ATP.",
        "Chlorophyll absorbs light, mostly in the blue and red wavelengths.",
        "Cell division happens through mitosis or meiosis.",
    ]
    return [Chunk(content=t, chunk_index=i) for i, t in enumerate(texts)]


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text(
        "Plants use photosynthesis to turn light into sugar.\n\n"
        "Animals rely on cellular respiration instead.\n\n"
        "Both processes involve energy transfer.",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def blank_file(tmp_path: Path) -> Path:
    path = tmp_path / "blank.txt"
    path.write_text("   \n\n \t \n", encoding="utf-8")
    return path


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """TestClient with an empty store and uploads under tmp_path."""
    from docsift.main import app

    monkeypatch.setattr(settings, "data_dir", str(tmp_path / "data"))
    app.state.store = InMemoryDocumentStore()
    return TestClient(app)
