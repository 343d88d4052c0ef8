from __future__ import annotations

import pytest

from linkguardian.config import CrawlConfig
from linkguardian.errors import InvalidStartUrl
from linkguardian.frontier import CrawlFrontier, crawl


def _links(*hrefs: str) -> str:
    return "".join(f'<a href="{h}">x</a>' for h in hrefs)


def test_end_to_end_same_domain_only(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({
        "https://example.com/page": _links("/docs", "https://other.com"),
        "https://example.com/docs": _links("/page"),
        "https://other.com/": "<p>external</p>",
    })

    pages = crawl("https://example.com/page", 2, fetcher=fetcher, sleep=no_sleep)

    assert [p.url for p in pages] == ["https://example.com/page", "https://example.com/docs"]
    assert "https://other.com/" not in fetcher.fetched
    url, content = pages[0]
    assert url == "https://example.com/page"
    assert "/docs" in content


@pytest.mark.parametrize("ok", [True, False])
def test_depth_one_fetches_only_the_seed(fake_fetcher, no_sleep, ok):
    pages_by_url = {"https://example.com/": _links("/a", "/b")} if ok else {}
    fetcher = fake_fetcher(pages_by_url)

    pages = crawl("https://example.com", 1, fetcher=fetcher, sleep=no_sleep)

    assert fetcher.fetched == ["https://example.com/"]
    assert len(pages) == (1 if ok else 0)
    if ok:
        assert pages[0].url == "https://example.com/"


def test_breadth_first_order(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({
        "https://example.com/": _links("/a", "/b"),
        "https://example.com/a": _links("/c", "/"),
        "https://example.com/b": _links("/a", "/d"),
        "https://example.com/c": "",
        "https://example.com/d": "",
    })

    pages = crawl("https://example.com/", 3, fetcher=fetcher, sleep=no_sleep)

    assert [p.url for p in pages] == [
        "https://example.com/",
        "https://example.com/a",
        "https://example.com/b",
        "https://example.com/c",
        "https://example.com/d",
    ]
    depths = [p.depth for p in pages]
    assert depths == sorted(depths) == [1, 2, 2, 3, 3]
    assert len(fetcher.fetched) == len(set(fetcher.fetched))


def test_fetch_failure_does_not_abort(fake_fetcher, no_sleep):
    fetcher = fake_fetcher(
        {
            "https://example.com/": _links("/broken", "/fine"),
            "https://example.com/fine": "",
        },
        failing={"https://example.com/broken": 500},
    )
    events = []

    pages = crawl(
        "https://example.com/", 2, fetcher=fetcher, sleep=no_sleep,
        progress_callback=events.append,
    )

    assert [p.url for p in pages] == ["https://example.com/", "https://example.com/fine"]
    assert [(e.current_url, e.event_type) for e in events] == [
        ("https://example.com/", "crawled"),
        ("https://example.com/broken", "failed"),
        ("https://example.com/fine", "crawled"),
    ]


def test_special_and_off_domain_links_never_enqueued(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({
        "https://example.com/": _links(
            "#top", "mailto:a@example.com", "tel:1", "javascript:void(0)",
            "https://sub.example.com/", "https://evil.com/", "ftp://example.com/f",
            "http://[::1",
        ),
    })

    pages = crawl("https://example.com/", 3, fetcher=fetcher, sleep=no_sleep)

    assert len(pages) == 1
    assert fetcher.fetched == ["https://example.com/"]


def test_politeness_delay_between_successful_fetches(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({
        "https://example.com/": _links("/a", "/missing"),
        "https://example.com/a": "",
    })

    crawl("https://example.com/", 2, config=CrawlConfig(delay=0.25), fetcher=fetcher, sleep=no_sleep)

    # After the seed and after /a; the failed fetch and the last page add none.
    assert no_sleep.calls == [0.25, 0.25]


def test_no_delay_when_only_visited_links_remain(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({
        "https://example.com/": _links("/a", "/b"),
        "https://example.com/a": _links("/b"),
        "https://example.com/b": "",
    })

    pages = crawl("https://example.com/", 3, config=CrawlConfig(delay=0.25), fetcher=fetcher, sleep=no_sleep)

    assert [p.url for p in pages] == [
        "https://example.com/", "https://example.com/a", "https://example.com/b",
    ]
    # /b was queued twice; the duplicate left after fetching it is skipped
    # without another pause.
    assert no_sleep.calls == [0.25, 0.25]


def test_self_link_only_seed_never_sleeps(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({"https://example.com/": _links("/", "#top")})

    crawl("https://example.com/", 2, config=CrawlConfig(delay=1.0), fetcher=fetcher, sleep=no_sleep)

    assert no_sleep.calls == []
    assert fetcher.fetched == ["https://example.com/"]


def test_max_pages_caps_the_crawl(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({
        "https://example.com/": _links("/a", "/b"),
        "https://example.com/a": "",
        "https://example.com/b": "",
    })
    config = CrawlConfig(max_pages=2)

    pages = crawl("https://example.com/", 2, config=config, fetcher=fetcher, sleep=no_sleep)

    assert len(pages) == 2
    assert config.max_depth == 1


@pytest.mark.parametrize("start_url", [
    "not a url",
    "ftp://example.com/",
    "mailto:someone@example.com",
    "http://127.0.0.1/",
    "https://",
])
def test_invalid_start_url(fake_fetcher, start_url):
    fetcher = fake_fetcher({})
    with pytest.raises(InvalidStartUrl):
        crawl(start_url, 1, fetcher=fetcher)
    assert fetcher.fetched == []


def test_max_depth_must_be_positive(fake_fetcher):
    with pytest.raises(ValueError):
        crawl("https://example.com/", 0, fetcher=fake_fetcher({}))


def test_frontier_exposes_base_domain_and_closes_only_owned_fetcher(fake_fetcher, no_sleep):
    fetcher = fake_fetcher({"https://Example.com/": ""})
    frontier = CrawlFrontier("https://Example.com", fetcher=fetcher, sleep=no_sleep)
    assert frontier.base_domain == "example.com"
    frontier.run()
    assert not fetcher.closed
