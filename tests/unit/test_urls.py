from recon_spider.recon.urls import (  # type: ignore[import]
    HTML,
    STATIC,
    classify_url,
    extract_domain,
    is_base64_like,
    normalize_for_api,
    normalize_for_crawl,
)


def test_extract_domain_returns_authority():
    assert extract_domain("https://example.com:8443/app/index.html") == "example.com:8443"
    assert extract_domain("http://example.com") == "example.com"


def test_extract_domain_ignores_user_info_and_other_schemes():
    assert extract_domain("http://user@evil.example/") is None
    assert extract_domain("mailto:admin@example.com") is None
    assert extract_domain("javascript:void(0)") is None
    assert extract_domain("data:image/png;base64,AAAA") is None


def test_normalize_for_crawl_keeps_absolute_references():
    assert normalize_for_crawl("https://cdn.example.org/lib.js", "https://example.com/") == (
        "https://cdn.example.org/lib.js"
    )
    assert normalize_for_crawl("wss://push.example.com/socket", "not a base") == (
        "wss://push.example.com/socket"
    )


def test_normalize_for_crawl_joins_relative_references():
    base = "https://example.com/app/"

    assert normalize_for_crawl("/docs/", base) == "https://example.com/docs/"
    assert normalize_for_crawl("page.html", base) == "https://example.com/app/page.html"
    assert normalize_for_crawl("//cdn.example.org/x.js", base) == "https://cdn.example.org/x.js"


def test_normalize_for_crawl_trims_surrounding_whitespace():
    base = "https://example.com/"

    assert normalize_for_crawl(" /docs/ ", base) == "https://example.com/docs/"
    assert normalize_for_crawl("\thttps://cdn.example.org/lib.js\n", base) == (
        "https://cdn.example.org/lib.js"
    )


def test_normalize_for_crawl_skips_unresolvable_references():
    assert normalize_for_crawl("//[broken/path", "https://example.com/") is None
    assert normalize_for_crawl("/docs/", "not-a-url") is None


def test_base64_heuristic():
    assert is_base64_like("data:image/png;base64,iVBORw0KGgo")
    assert is_base64_like("a+b+c/d=e=f=")
    assert is_base64_like("/" + "x" * 120)
    assert not is_base64_like("/api/users")


def test_normalize_for_api_substitutes_api_core_for_bare_api():
    assert normalize_for_api("api", "https://example.com/", "/v2/") == "https://example.com/v2"
    assert normalize_for_api("/api/", "https://example.com", "/api/") == "https://example.com/api"


def test_normalize_for_api_joins_paths_and_keeps_query():
    base = "https://example.com"

    assert normalize_for_api("/api/users", base, "/api/") == "https://example.com/api/users"
    assert normalize_for_api("/api/users?id=1", base, "/api/") == (
        "https://example.com/api/users?id=1"
    )
    assert normalize_for_api("/api/user%20list", base, "/api/") == (
        "https://example.com/api/user list"
    )


def test_normalize_for_api_keeps_absolute_fragments():
    assert normalize_for_api("https://other.example/api/x", "https://example.com", "/api/") == (
        "https://other.example/api/x"
    )


def test_normalize_for_api_rejects_assets_and_blobs():
    base = "https://example.com"

    assert normalize_for_api("/static/logo.svg", base, "/api/") == ""
    assert normalize_for_api("/assets/images/banner", base, "/api/") == ""
    assert normalize_for_api("/fonts/roboto", base, "/api/") == ""
    assert normalize_for_api("/bundle.js?v=3", base, "/api/") == ""
    assert normalize_for_api("a+b+c+d+e+f=", base, "/api/") == ""


def test_classify_url_is_mutually_exclusive():
    assert classify_url("https://example.com/login.php") == HTML
    assert classify_url("https://example.com/index.html") == HTML
    assert classify_url("https://example.com/static/app.js") == STATIC
    assert classify_url("https://example.com/backup/site.tar.gz") == STATIC
    assert classify_url("https://example.com/docs/") is None
    assert classify_url("https://example.com/api/users") is None
