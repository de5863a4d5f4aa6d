"""Unit tests for shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose yields different instances.
- A closed client is replaced on next lookup.
"""
from __future__ import annotations

from openai_completions.base.http import close_all_clients, get_httpx_client


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.openai.com", purpose="completions.stream")
    c2 = get_httpx_client("https://api.openai.com", purpose="completions.stream")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101 - pytest assert


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client(None, purpose="completions.stream")
    c2 = get_httpx_client(None, purpose="other")
    assert c1 is not c2, "Different purposes should not share the same client instance"  # nosec B101 - pytest assert


def test_closed_client_is_replaced():
    c1 = get_httpx_client(None, purpose="completions.stream")
    close_all_clients()
    assert c1.is_closed  # nosec B101 - pytest assert
    c2 = get_httpx_client(None, purpose="completions.stream")
    assert c2 is not c1 and not c2.is_closed  # nosec B101 - pytest assert
