import requests

from tests.helpers.fake_http import FakeSession
from tests.helpers.recon_imports import (
    DiscoveryReport,
    ProbeTargetsArtifact,
    ScanConfig,
    liveness,
)


def make_config(**overrides):
    options = {"target_url": "https://example.com/", "probe_workers": 2}
    options.update(overrides)
    return ScanConfig(**options)


def test_categorize_status():
    assert liveness.categorize_status(200) == "ok"
    assert liveness.categorize_status(302) == "redirect"
    assert liveness.categorize_status(401) == "denied"
    assert liveness.categorize_status(403) == "denied"
    assert liveness.categorize_status(404) == "not_found"
    assert liveness.categorize_status(503) == "server_error"
    assert liveness.categorize_status(301) == "other"


def test_run_liveness_probe_records_status_and_length():
    session = FakeSession(
        {
            "https://example.com/admin.php": (403, "", {"content-length": "17"}),
            "https://example.com/app.js": (200, "ok"),
            "https://example.com/down/": requests.ConnectionError("refused"),
        }
    )
    targets = ProbeTargetsArtifact.from_iterable(
        [
            "https://example.com/down/",
            "https://example.com/app.js",
            "https://example.com/admin.php",
        ]
    )

    result = liveness.run_liveness_probe(make_config(), targets, session=session)

    assert [entry.url for entry in result.results] == [
        "https://example.com/admin.php",
        "https://example.com/app.js",
        "https://example.com/down/",
    ]
    admin, script, down = result.results
    assert (admin.status_code, admin.content_length, admin.category) == (403, "17", "denied")
    assert (script.status_code, script.content_length, script.category) == (200, "N/A", "ok")
    assert down.status_code is None
    assert down.category == "error"
    assert "refused" in down.error
    assert [entry.url for entry in result.alive] == ["https://example.com/app.js"]


def test_blacklisted_urls_are_not_probed():
    session = FakeSession({})
    report = DiscoveryReport.build(
        "https://example.com/",
        static_urls=["https://hm.baidu.com/hm.js", "https://example.com/app.js"],
    )

    result = liveness.run_liveness_probe(make_config(blacklist=("baidu",)), report, session=session)

    assert result.checked_urls == ("https://example.com/app.js",)
    assert session.calls == ["https://example.com/app.js"]


def test_run_liveness_probe_returns_empty_when_no_targets():
    result = liveness.run_liveness_probe(make_config(), ProbeTargetsArtifact.from_iterable([]))

    assert result.results == []
    assert result.checked_urls == ()


def test_redirects_are_reported_instead_of_followed():
    session = FakeSession(
        {"https://example.com/login": (302, "", {"content-length": "0"})}
    )
    targets = ProbeTargetsArtifact.from_iterable(["https://example.com/login"])

    result = liveness.run_liveness_probe(make_config(request_timeout=5.0), targets, session=session)

    (entry,) = result.results
    assert (entry.status_code, entry.category) == (302, "redirect")
    assert session.options == [{"timeout": 5.0, "allow_redirects": False, "stream": True}]
