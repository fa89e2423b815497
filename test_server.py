#!/usr/bin/env python3
"""
Tests for server wiring: argument parsing and rate limiter setup.
"""

import asyncio

import axiom_server


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HOST", raising=False)

    args = axiom_server.parse_args([])

    assert args.config_file is None
    assert args.transport == "streamable-http"
    assert args.port == 3000
    assert args.host == "0.0.0.0"


def test_parse_args_config_and_transport():
    args = axiom_server.parse_args(["config.json", "--transport", "stdio", "--port", "8080"])

    assert args.config_file == "config.json"
    assert args.transport == "stdio"
    assert args.port == 8080


def test_rate_limiters_rebuilt_from_environment(axiom_env):
    axiom_env.setenv("AXIOM_DATASETS_BURST", "2")
    axiom_server.reset_rate_limiters()

    datasets_limiter = axiom_server.get_rate_limiter("datasets")

    assert datasets_limiter.try_remove_tokens()
    assert datasets_limiter.try_remove_tokens()
    assert not datasets_limiter.try_remove_tokens()
    assert axiom_server.get_rate_limiter("datasets") is datasets_limiter

    axiom_server.reset_rate_limiters()


def _fake_collaborator(calls):
    async def fake(*args, **kwargs):
        calls.append((args, kwargs))
        return "{}"
    return fake


def test_query_tool_rejects_over_limit(axiom_env):
    calls = []
    axiom_env.setattr(axiom_server, "axiom_query_apl", _fake_collaborator(calls))
    axiom_server.reset_rate_limiters()

    assert asyncio.run(axiom_server.query_apl.fn(None, "['logs'] | take 1")) == "{}"
    assert asyncio.run(axiom_server.query_apl.fn(None, "['logs'] | take 1")) == "Error: Rate limit exceeded for queries"
    assert len(calls) == 1

    axiom_server.reset_rate_limiters()


def test_dataset_tools_share_one_limiter(axiom_env):
    calls = []
    axiom_env.setattr(axiom_server, "axiom_list_datasets", _fake_collaborator(calls))
    axiom_env.setattr(axiom_server, "axiom_get_dataset_info", _fake_collaborator(calls))
    axiom_server.reset_rate_limiters()

    assert asyncio.run(axiom_server.list_datasets.fn(None)) == "{}"
    assert asyncio.run(axiom_server.get_dataset_info_and_schema.fn(None, "http-logs")) == (
        "Error: Rate limit exceeded for dataset operations"
    )
    assert len(calls) == 1

    axiom_server.reset_rate_limiters()


def test_query_budget_independent_of_datasets(axiom_env):
    axiom_env.setattr(axiom_server, "axiom_list_datasets", _fake_collaborator([]))
    axiom_env.setattr(axiom_server, "axiom_query_apl", _fake_collaborator([]))
    axiom_server.reset_rate_limiters()

    assert asyncio.run(axiom_server.list_datasets.fn(None)) == "{}"
    assert asyncio.run(axiom_server.query_apl.fn(None, "['logs'] | count")) == "{}"

    axiom_server.reset_rate_limiters()
