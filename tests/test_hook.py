# File: tests/test_hook.py
"""End-to-end behaviour of the hook driver with fake disk and network access."""
from types import SimpleNamespace

import pytest

from sitemap_ping.hook import on_success, publish_dir_from, run_hook
from sitemap_ping.models import Outcome, RunStatus

GOOGLE = "https://www.google.com/ping?sitemap=https%3A%2F%2Fexample.com%2Fsitemap-index.xml"
BING = "https://www.bing.com/ping?sitemap=https%3A%2F%2Fexample.com%2Fsitemap-index.xml"
YANDEX = "https://yandex.com/ping?sitemap=https%3A%2F%2Fexample.com%2Fsitemap-index.xml"


@pytest.mark.asyncio()
async def test_end_to_end_default_path(build_dir, fake_getter):
    getter = fake_getter({})
    report = await on_success(
        {"PUBLISH_DIR": str(build_dir)}, {"siteUrl": "https://example.com/"}, None, env={}, getter=getter
    )
    assert report.status is RunStatus.NOTIFIED
    assert report.sitemap_url == "https://example.com/sitemap-index.xml"
    assert getter.urls == [GOOGLE, BING, YANDEX]
    assert all(r.ok for r in report.results)


@pytest.mark.asyncio()
async def test_no_site_url_touches_nothing(fake_checker, fake_getter, ping_log):
    checker = fake_checker(present={"/sitemap-index.xml"})
    getter = fake_getter({})
    report = await on_success({"PUBLISH_DIR": "/build"}, {}, env={}, checker=checker, getter=getter)

    assert report.status is RunStatus.UNRESOLVED
    assert checker.calls == []
    assert getter.urls == []
    assert any(r.levelname == "WARNING" for r in ping_log.records)


@pytest.mark.asyncio()
async def test_env_url_used(build_dir, fake_getter):
    getter = fake_getter({})
    report = await on_success(
        SimpleNamespace(PUBLISH_DIR=build_dir), None, env={"URL": "https://example.com"}, getter=getter
    )
    assert report.status is RunStatus.NOTIFIED
    assert getter.urls[0] == GOOGLE


@pytest.mark.asyncio()
async def test_fallback_keeps_configured_url(tmp_path, fake_getter, ping_log):
    (tmp_path / "sitemap.xml").write_text("<urlset/>", encoding="utf-8")
    getter = fake_getter({})
    report = await on_success(
        {"PUBLISH_DIR": str(tmp_path)},
        {"siteUrl": "https://example.com", "sitemapPath": "/custom-map.xml"},
        env={},
        getter=getter,
    )

    assert report.status is RunStatus.NOTIFIED
    assert report.location.path == "/sitemap.xml"
    assert report.location.fallback is True
    assert "Sitemap not at /custom-map.xml, using /sitemap.xml instead." in ping_log.messages
    # pings still carry the configured path, not the one found on disk
    assert report.sitemap_url == "https://example.com/custom-map.xml"
    assert all("custom-map.xml" in url for url in getter.urls)
    assert not any("%2Fsitemap.xml" in url for url in getter.urls)


@pytest.mark.asyncio()
async def test_missing_sitemap_no_network(tmp_path, fake_getter):
    getter = fake_getter({})
    report = await on_success({"PUBLISH_DIR": str(tmp_path)}, {"siteUrl": "https://example.com"}, env={}, getter=getter)
    assert report.status is RunStatus.SITEMAP_MISSING
    assert getter.urls == []
    assert report.results == []


@pytest.mark.asyncio()
async def test_mixed_outcomes_complete_normally(build_dir, fake_getter, ping_log):
    getter = fake_getter(
        {"google": 200, "bing": 404, "yandex": ConnectionRefusedError(111, "Connection refused")}
    )
    report = await on_success({"PUBLISH_DIR": str(build_dir)}, {"siteUrl": "https://example.com"}, env={}, getter=getter)

    assert report.status is RunStatus.NOTIFIED
    assert [r.outcome for r in report.results] == [
        Outcome.SUCCESS,
        Outcome.NON_SUCCESS,
        Outcome.TRANSPORT_ERROR,
    ]
    outcome_lines = [m for m in ping_log.messages if m.startswith("[")]
    assert len(outcome_lines) == 3
    assert "Done: search engines notified." in ping_log.messages


@pytest.mark.asyncio()
@pytest.mark.parametrize("concurrent", [False, True])
async def test_unexpected_error_is_contained(build_dir, fake_getter, ping_log, concurrent):
    getter = fake_getter({"google": RuntimeError("boom")})
    report = await on_success(
        {"PUBLISH_DIR": str(build_dir)},
        {"siteUrl": "https://example.com"},
        env={},
        getter=getter,
        concurrent=concurrent,
    )

    assert report.status is RunStatus.NOTIFIED
    assert sorted(getter.urls) == sorted([GOOGLE, BING, YANDEX])
    assert [r.outcome for r in report.results] == [
        Outcome.TRANSPORT_ERROR,
        Outcome.SUCCESS,
        Outcome.SUCCESS,
    ]
    assert report.results[0].error == "boom"
    assert "[error] Google: boom" in ping_log.messages
    assert "Done: search engines notified." in ping_log.messages
    assert not any(r.levelname == "ERROR" for r in ping_log.records)


@pytest.mark.asyncio()
async def test_no_site_url_does_not_need_publish_dir(ping_log):
    report = await on_success({}, {}, env={})

    assert report.status is RunStatus.UNRESOLVED
    warnings = [r.getMessage() for r in ping_log.records if r.levelname == "WARNING"]
    assert len(warnings) == 1
    assert "siteUrl" in warnings[0]
    assert not any(r.levelname == "ERROR" for r in ping_log.records)


@pytest.mark.asyncio()
async def test_malformed_inputs_are_contained(build_dir):
    report = await on_success({"PUBLISH_DIR": str(build_dir)}, {"siteUrl": ["not", "a", "string"]}, env={})
    assert report.status is RunStatus.CRASHED


@pytest.mark.asyncio()
async def test_missing_publish_dir_is_contained():
    report = await on_success({}, {"siteUrl": "https://example.com"}, env={})
    assert report.status is RunStatus.CRASHED


def test_publish_dir_from_mapping_and_object(tmp_path):
    assert publish_dir_from({"PUBLISH_DIR": str(tmp_path)}) == str(tmp_path)
    assert publish_dir_from(SimpleNamespace(PUBLISH_DIR=tmp_path)) == tmp_path
    with pytest.raises(ValueError):
        publish_dir_from(SimpleNamespace())


def test_run_twice_is_idempotent(build_dir, fake_getter):
    before = sorted(p.name for p in build_dir.iterdir())
    outcomes = []
    for _ in range(2):
        getter = fake_getter({"bing": 503})
        report = run_hook(
            {"PUBLISH_DIR": str(build_dir)}, {"siteUrl": "https://example.com"}, env={}, getter=getter
        )
        outcomes.append([(r.target.name, r.outcome) for r in report.results])
    assert outcomes[0] == outcomes[1]
    assert sorted(p.name for p in build_dir.iterdir()) == before


def test_report_to_dict(build_dir, fake_getter):
    report = run_hook(
        {"PUBLISH_DIR": str(build_dir)}, {"siteUrl": "https://example.com"}, env={}, getter=fake_getter({"yandex": 410})
    )
    data = report.to_dict()
    assert data["status"] == "notified"
    assert data["sitemap_path"] == "/sitemap-index.xml"
    assert data["fallback"] is False
    assert [r["outcome"] for r in data["results"]] == ["success", "success", "non_success"]
    assert data["results"][0]["url"] == GOOGLE
    assert data["results"][2]["status"] == 410
