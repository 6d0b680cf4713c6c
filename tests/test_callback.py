import pytest

from spotify_oauth.core.callback import CallbackResult, Denied, Granted
from spotify_oauth.core.errors import ErrorKind, SpotifyOAuthError


def test_parse_callback_code():
    result = CallbackResult.parse("http://localhost:8888/callback?code=AQD0yXvFEOvw&state=sN")
    assert result == Granted(code="AQD0yXvFEOvw", state="sN")
    assert result.is_granted


def test_parse_callback_error():
    result = CallbackResult.parse("http://localhost:8888/callback?error=access_denied&state=sN")
    assert result == Denied(error="access_denied", state="sN")
    assert not result.is_granted


@pytest.mark.parametrize(
    "url, context",
    [
        ("http://localhost:8888/callback", "state or response"),
        ("http://localhost:8888/callback?foo=bar", "state or response"),
        ("http://localhost:8888/callback?code=abc", "any state type"),
        ("http://localhost:8888/callback?error=access_denied", "any state type"),
        ("http://localhost:8888/callback?state=sN", "any response type"),
    ],
)
def test_missing_parameters_are_told_apart(url, context):
    with pytest.raises(SpotifyOAuthError) as ei:
        CallbackResult.parse(url)
    assert ei.value.kind is ErrorKind.INVALID_CALLBACK_URL
    assert context in ei.value.context


def test_malformed_url_is_a_parse_failure():
    with pytest.raises(SpotifyOAuthError) as ei:
        CallbackResult.parse("::not a url")
    assert ei.value.kind is ErrorKind.PARSING_FAILED


def test_first_occurrence_wins_for_duplicate_keys():
    result = CallbackResult.parse("http://h/cb?code=first&state=s1&code=second&state=s2")
    assert result == Granted(code="first", state="s1")


def test_code_takes_precedence_over_error():
    result = CallbackResult.parse("http://h/cb?error=access_denied&code=abc&state=sN")
    assert result == Granted(code="abc", state="sN")


def test_blank_values_are_kept():
    assert CallbackResult.parse("http://h/cb?code=&state=") == Granted(code="", state="")


def test_values_are_percent_decoded():
    result = CallbackResult.parse("http://h/cb?error=access%20denied&state=a%2Bb")
    assert result == Denied(error="access denied", state="a+b")


def test_results_are_immutable():
    result = Granted(code="c", state="s")
    with pytest.raises(AttributeError):
        result.code = "other"
