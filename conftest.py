import pytest


@pytest.fixture
def axiom_env(monkeypatch):
    """Minimal valid Axiom configuration."""
    monkeypatch.setenv("AXIOM_TOKEN", "xaat-test-token")
    monkeypatch.setenv("AXIOM_URL", "https://api.axiom.test")
    monkeypatch.delenv("AXIOM_ORG_ID", raising=False)
    for name in ("QUERY_RATE", "QUERY_BURST", "DATASETS_RATE", "DATASETS_BURST"):
        monkeypatch.delenv(f"AXIOM_{name}", raising=False)
    return monkeypatch
