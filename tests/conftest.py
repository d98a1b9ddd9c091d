import pytest

from app.book import model


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    url = "sqlite:///%s" % (tmp_path / "alpha.db")
    monkeypatch.setattr(model, "DB_URL", url)
    return url


@pytest.fixture
def unreachable_db(tmp_path, monkeypatch):
    url = "sqlite:///%s" % (tmp_path / "missing" / "dir" / "alpha.db")
    monkeypatch.setattr(model, "DB_URL", url)
    return url


@pytest.fixture
def seeded(db_url):
    from app.book.controller import seed_books
    seed_books()
    return db_url
