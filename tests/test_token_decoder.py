import base64

import pytest

from security.token_decoder import role_from_token


@pytest.mark.parametrize("role", ["customer", "owner", "admin"])
def test_reads_known_roles(role, token_for):
    assert role_from_token(token_for({"sub": "u1", "role": role})) == role


@pytest.mark.parametrize("token", [
    None,
    "",
    "not-a-token",
    "only.two",
    "a..c",
    "a.b.c.d",
    "header.!!!notbase64!!!.sig",
    "header." + base64.urlsafe_b64encode(b"not json").decode().rstrip("=") + ".sig",
    "header." + base64.urlsafe_b64encode(b"\xff\xfe\xfa").decode().rstrip("=") + ".sig",
    "header." + base64.urlsafe_b64encode(b"[" * 100000).decode().rstrip("=") + ".sig",
    12345,
])
def test_malformed_tokens_yield_none(token):
    assert role_from_token(token) is None


def test_missing_or_unknown_role_yields_none(token_for):
    assert role_from_token(token_for({"sub": "u1"})) is None
    assert role_from_token(token_for({"role": "superuser"})) is None
    assert role_from_token(token_for({"role": 3})) is None


def test_non_object_payload_yields_none(token_for):
    assert role_from_token(token_for(["admin"])) is None
    assert role_from_token(token_for("admin")) is None


def test_url_safe_characters_are_translated(token_for):
    # A payload long enough to produce '-' or '_' in its encoding
    payload = {"role": "owner", "name": "??>>??>>~~~" * 5}
    token = token_for(payload)
    assert "-" in token.split(".")[1] or "_" in token.split(".")[1]
    assert role_from_token(token) == "owner"


def test_decoding_is_idempotent(token_for):
    token = token_for({"role": "admin"})
    assert role_from_token(token) == role_from_token(token) == "admin"
