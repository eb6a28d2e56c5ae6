"""Tests for the catalog poll-and-diff loop."""

import pytest

from storefront.infrastructure.catalog_poller import CatalogPoller


def test_change_detected_only_when_data_differs():
    snapshots = iter([[{"id": "1"}], [{"id": "1"}], [{"id": "1"}, {"id": "2"}]])
    seen = []
    poller = CatalogPoller(lambda: next(snapshots), seen.append, interval=1.0)

    assert poller.poll_once() is True
    assert poller.poll_once() is False
    assert poller.poll_once() is True
    assert len(seen) == 2


def test_failed_fetch_keeps_previous_snapshot():
    results = [[{"id": "1"}], OSError("disk gone"), [{"id": "1"}]]

    def fetch():
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    seen = []
    poller = CatalogPoller(fetch, seen.append, interval=1.0)
    assert poller.poll_once() is True
    assert poller.poll_once() is False
    assert poller.poll_once() is False
    assert len(seen) == 1


def test_run_sleeps_between_polls():
    sleeps = []
    poller = CatalogPoller(lambda: [], lambda _: None, interval=2.5, sleep=sleeps.append)
    poller.run(max_polls=3)
    assert sleeps == [2.5, 2.5]


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        CatalogPoller(lambda: [], lambda _: None, interval=0)
