# File: tests/test_scope.py
import pytest

from link_scout.scope import MalformedURLError, NoHostnameError, resolve_scope, subdomain_pattern


def test_default_scope_is_exact_hostname():
    scope = resolve_scope("https://example.com/start")
    assert scope.pattern is None
    assert scope.allowed_domains == frozenset({"example.com"})
    assert scope.allows("http://example.com:8080/other")
    assert not scope.allows("https://sub.example.com/")
    assert not scope.allows("https://notexample.com/")


def test_host_override_extends_allow_list():
    scope = resolve_scope("https://10.0.0.5/", host_override="internal.example")
    assert scope.allowed_domains == frozenset({"10.0.0.5", "internal.example"})
    assert scope.allows("https://internal.example/admin")


def test_subdomain_mode_disables_allow_list():
    scope = resolve_scope("https://example.com/", include_subdomains=True, host_override="other.test")
    assert scope.allowed_domains == frozenset()
    assert scope.pattern is not None
    assert not scope.allows("https://other.test/")


@pytest.mark.parametrize(
    "url",
    [
        "https://a.example.com/x",
        "example.com?y",
        "https://example.com",
        "https://example.com#frag",
        "http://example.com:8080/",
        "sub.example.com/path",
    ],
)
def test_subdomain_pattern_matches(url):
    assert subdomain_pattern("example.com").search(url)


@pytest.mark.parametrize(
    "url",
    ["notexample.com", "https://notexample.com/", "https://exampleXcom/", "https://example.company/"],
)
def test_subdomain_pattern_rejects(url):
    assert subdomain_pattern("example.com").search(url) is None


def test_subdomain_scope_of_nested_seed():
    scope = resolve_scope("https://a.example.com/page?x", include_subdomains=True)
    assert scope.allows("sub.a.example.com/z")
    assert not scope.allows("https://b.example.com/")


@pytest.mark.parametrize("seed", ["http://[::1", "https://example.com]:80/"])
def test_malformed_seed(seed):
    with pytest.raises(MalformedURLError):
        resolve_scope(seed)


@pytest.mark.parametrize("seed", ["example.com", "not a url", "/relative/path"])
def test_seed_without_hostname(seed):
    with pytest.raises(NoHostnameError):
        resolve_scope(seed)


def test_subdomain_scope_ignores_case():
    scope = resolve_scope("https://Example.COM/", include_subdomains=True)
    assert scope.allows("https://Example.COM/")
    assert scope.allows("https://WWW.example.com/Path")
    assert scope.allows("http://api.EXAMPLE.com:8443/")
    assert not scope.allows("https://NotExample.com/")


def test_default_scope_ignores_case():
    scope = resolve_scope("https://Example.COM/", host_override="Internal.Example")
    assert scope.allowed_domains == frozenset({"example.com", "internal.example"})
    assert scope.allows("https://EXAMPLE.com/x")
    assert scope.allows("https://internal.EXAMPLE/")
