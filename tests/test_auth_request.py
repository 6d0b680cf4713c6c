from urllib.parse import parse_qsl, urlsplit

import pytest

from spotify_oauth.core import auth as auth_mod
from spotify_oauth.core.auth import STATE_LENGTH, AuthRequest, generate_random_string
from spotify_oauth.core.callback import Denied, Granted
from spotify_oauth.core.config import SpotifyOAuthSettings
from spotify_oauth.core.errors import ErrorKind, SpotifyOAuthError
from spotify_oauth.core.scope import Scope


def _request(**kw):
    args = dict(
        client_id="00000000000",
        client_secret="secret",
        response_type="code",
        redirect_uri="http://localhost:8000/callback",
        scopes=[Scope.STREAMING],
        show_dialog=False,
    )
    args.update(kw)
    return AuthRequest.new(**args)


def test_random_string_is_alphanumeric():
    s = generate_random_string(STATE_LENGTH)
    assert len(s) == 20
    assert s.isalnum() and s.isascii()


def test_state_generated_per_request():
    a, b = _request(), _request()
    assert len(a.state) == STATE_LENGTH
    assert a.state != b.state


def test_authorize_url_parameter_order_and_values():
    auth = _request(scopes=[Scope.STREAMING, Scope.USER_READ_EMAIL], show_dialog=True)
    url = auth.authorize_url()
    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://accounts.spotify.com/authorize"
    pairs = parse_qsl(parts.query)
    assert [k for k, _ in pairs] == [
        "client_id",
        "response_type",
        "redirect_uri",
        "state",
        "scope",
        "show_dialog",
    ]
    assert dict(pairs) == {
        "client_id": "00000000000",
        "response_type": "code",
        "redirect_uri": "http://localhost:8000/callback",
        "state": auth.state,
        "scope": "streaming user-read-email",
        "show_dialog": "true",
    }
    # spaces are form-encoded
    assert "scope=streaming+user-read-email" in url


def test_authorize_urls_differ_only_in_state():
    a, b = _request(), _request()
    qa = dict(parse_qsl(urlsplit(a.authorize_url()).query))
    qb = dict(parse_qsl(urlsplit(b.authorize_url()).query))
    assert qa.pop("state") != qb.pop("state")
    assert qa == qb
    assert qa["show_dialog"] == "false"


def test_empty_scope_list_renders_empty_scope():
    auth = _request(scopes=[])
    assert auth.scope_string() == ""
    assert ("scope", "") in parse_qsl(urlsplit(auth.authorize_url()).query, keep_blank_values=True)


@pytest.mark.parametrize("bad", ["not a url", "/callback", ""])
def test_invalid_redirect_uri_fails_at_construction(bad):
    with pytest.raises(SpotifyOAuthError) as ei:
        _request(redirect_uri=bad)
    assert ei.value.kind is ErrorKind.PARSING_FAILED
    assert ei.value.cause is not None


def test_secret_not_in_repr():
    assert "hunter2" not in repr(_request(client_secret="hunter2"))


def test_from_settings():
    settings = SpotifyOAuthSettings(client_id="id", client_secret="sec")
    auth = AuthRequest.from_settings(settings, [Scope.STREAMING], show_dialog=True)
    assert auth.client_id == "id"
    assert auth.redirect_uri == "http://localhost:8000/callback"
    assert auth.response_type == "code"
    assert auth.show_dialog is True


def test_verify_state(monkeypatch):
    monkeypatch.setattr(auth_mod, "generate_random_string", lambda n: "S" * n)
    auth = _request()
    auth.verify_state(Granted(code="c", state="S" * 20))
    auth.verify_state(Denied(error="access_denied", state="S" * 20))
    with pytest.raises(SpotifyOAuthError) as ei:
        auth.verify_state(Granted(code="c", state="forged"))
    assert ei.value.kind is ErrorKind.INVALID_CALLBACK_URL


def test_take_credentials_consumes_secret():
    auth = _request()
    assert auth.take_credentials() == ("00000000000", "secret", "http://localhost:8000/callback")
    assert auth.client_secret is None
    with pytest.raises(SpotifyOAuthError):
        auth.take_credentials()


def test_state_cannot_be_supplied():
    with pytest.raises(TypeError):
        AuthRequest(
            client_id="id",
            client_secret="sec",
            response_type="code",
            redirect_uri="http://localhost:8000/callback",
            state="chosen-by-caller",
        )
