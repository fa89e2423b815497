#!/usr/bin/env python3
"""
Tests for Axiom configuration handling.
"""

import json
import os

import pytest

from src.axiom.config import (
    DEFAULT_AXIOM_URL,
    get_axiom_base_url,
    get_axiom_config,
    get_axiom_headers,
    get_rate_limit_config,
    is_axiom_configured,
    load_config_file,
    validate_axiom_config,
)


def test_missing_token_reported(axiom_env):
    axiom_env.delenv("AXIOM_TOKEN")

    error = validate_axiom_config()

    assert "AXIOM_TOKEN" in error
    assert not is_axiom_configured()


def test_defaults(axiom_env):
    axiom_env.delenv("AXIOM_URL")

    config = get_axiom_config()

    assert config["url"] == DEFAULT_AXIOM_URL
    assert get_rate_limit_config() == {
        "query": {"rate": 1.0, "burst": 1},
        "datasets": {"rate": 1.0, "burst": 1},
    }
    assert validate_axiom_config() is None


def test_invalid_rate_reported(axiom_env):
    axiom_env.setenv("AXIOM_DATASETS_BURST", "lots")
    assert "Invalid rate limit configuration" in validate_axiom_config()

    axiom_env.setenv("AXIOM_DATASETS_BURST", "0")
    assert "must be positive" in validate_axiom_config()


def test_base_url_strips_trailing_slash(axiom_env):
    axiom_env.setenv("AXIOM_URL", "https://api.eu.axiom.test/")
    assert get_axiom_base_url() == "https://api.eu.axiom.test"


def test_headers_include_org_when_set(axiom_env):
    headers = get_axiom_headers()
    assert headers["Authorization"] == "Bearer xaat-test-token"
    assert "X-Axiom-Org-Id" not in headers

    axiom_env.setenv("AXIOM_ORG_ID", "acme-1234")
    headers = get_axiom_headers({"X-Request": "1"})
    assert headers["X-Axiom-Org-Id"] == "acme-1234"
    assert headers["X-Request"] == "1"


def test_load_config_file_exports_env(axiom_env, tmp_path):
    # setenv first so monkeypatch restores what load_config_file writes
    for key in ("AXIOM_TOKEN", "AXIOM_QUERY_RATE", "AXIOM_ORG_ID"):
        axiom_env.setenv(key, "placeholder")
        axiom_env.delenv(key)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"token": "from-file", "query_rate": 2, "org_id": "acme"}))

    exported = load_config_file(str(path))

    assert exported == {"AXIOM_TOKEN": "from-file", "AXIOM_QUERY_RATE": "2", "AXIOM_ORG_ID": "acme"}
    assert os.environ["AXIOM_TOKEN"] == "from-file"
    assert get_rate_limit_config()["query"]["rate"] == 2.0


def test_load_config_file_errors(tmp_path):
    with pytest.raises(OSError):
        load_config_file(str(tmp_path / "missing.json"))

    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_config_file(str(path))

    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_config_file(str(path))


def test_non_finite_rate_reported(axiom_env):
    for value in ("nan", "inf", "-inf"):
        axiom_env.setenv("AXIOM_QUERY_RATE", value)
        assert validate_axiom_config() is not None

    axiom_env.setenv("AXIOM_QUERY_RATE", "1")
    axiom_env.setenv("AXIOM_DATASETS_RATE", "NaN")
    assert "AXIOM_DATASETS_RATE" in validate_axiom_config()


def test_load_config_file_rejects_null(axiom_env, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"url": "https://other.axiom.test", "token": None}))

    with pytest.raises(ValueError):
        load_config_file(str(path))

    # nothing from the file is exported
    assert os.environ["AXIOM_TOKEN"] == "xaat-test-token"
    assert os.environ["AXIOM_URL"] == "https://api.axiom.test"


def test_load_config_file_keeps_json_spelling(axiom_env, tmp_path):
    axiom_env.setenv("AXIOM_VERBOSE", "placeholder")
    axiom_env.setenv("AXIOM_DATASETS_RATE", "placeholder")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"verbose": True, "datasets_rate": 0.5}))

    exported = load_config_file(str(path))

    assert exported == {"AXIOM_VERBOSE": "true", "AXIOM_DATASETS_RATE": "0.5"}
    assert os.environ["AXIOM_VERBOSE"] == "true"
