"""Alert list view: filtering, live refresh and fetch failures."""

import pytest

from modules.alerts.manager import AlertListView
from modules.alerts.utils import render_card, filter_reports, status_counts
from conftest import NOW, FakeStore


@pytest.mark.asyncio
async def test_mount_fetches_and_subscribes(store):
    view = AlertListView(store)
    assert view.loading
    assert view.render() == {"view": "home", "loading": True}

    await view.mount()

    assert not view.loading
    assert [r.title for r in view.reports] == ["Burst main", "No water", "Brown water", "Leaking hydrant"]
    assert view.subscribed
    assert len(store.active_subscriptions) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status_filter", ["all", "active", "investigating", "resolved"])
async def test_filter_selects_matching_status(store, status_filter):
    view = AlertListView(store)
    await view.mount()
    view.set_filter(status_filter)

    expected = [r for r in view.reports if status_filter == "all" or r.status == status_filter]
    assert view.filtered_reports == expected
    assert [c.id for c in view.render()["reports"]] == [r.id for r in expected]


@pytest.mark.asyncio
async def test_filter_change_does_not_refetch(store):
    view = AlertListView(store)
    await view.mount()
    view.set_filter("resolved")
    view.set_filter("active")
    assert store.query_count == 1


@pytest.mark.asyncio
async def test_unknown_filter_rejected(store):
    view = AlertListView(store)
    await view.mount()
    with pytest.raises(ValueError):
        view.set_filter("closed")
    assert view.filter == "all"


@pytest.mark.asyncio
async def test_empty_messages(empty_store):
    view = AlertListView(empty_store)
    await view.mount()
    assert view.render()["empty_message"] == "No water issues reported yet."

    view.set_filter("investigating")
    assert view.render()["empty_message"] == "No investigating reports found."


@pytest.mark.asyncio
async def test_no_empty_message_when_reports_shown(store):
    view = AlertListView(store)
    await view.mount()
    assert view.render()["empty_message"] is None


@pytest.mark.asyncio
async def test_change_notification_refetches_and_keeps_filter(store, make_report, settle):
    updates = []

    async def on_update():
        updates.append(view.filter)

    view = AlertListView(store, on_update=on_update)
    await view.mount()
    view.set_filter("active")

    store.reports.append(make_report(title="New leak", status="active", minutes_ago=-1))
    store.notify()
    await settle()

    assert store.query_count == 2
    assert view.filter == "active"
    assert view.filtered_reports[0].title == "New leak"
    assert updates == ["active"]


@pytest.mark.asyncio
async def test_fetch_failure_degrades_silently(empty_store):
    empty_store.fail_query = True
    view = AlertListView(empty_store)
    await view.mount()

    assert not view.loading
    assert view.reports == []
    assert view.render()["empty_message"] == "No water issues reported yet."


@pytest.mark.asyncio
async def test_refetch_failure_keeps_previous_set(store, settle):
    view = AlertListView(store)
    await view.mount()
    before = list(view.reports)

    store.fail_query = True
    store.notify()
    await settle()

    assert view.reports == before


@pytest.mark.asyncio
async def test_subscribe_failure_leaves_list_usable(store):
    store.fail_subscribe = True
    view = AlertListView(store)
    await view.mount()

    assert not view.subscribed
    assert len(view.reports) == 4
    await view.unmount()


@pytest.mark.asyncio
async def test_unmount_releases_subscription(store):
    view = AlertListView(store)
    await view.mount()
    await view.unmount()

    assert not view.subscribed
    assert store.active_subscriptions == []


@pytest.mark.asyncio
async def test_render_counts_and_summary(store):
    view = AlertListView(store)
    await view.mount()
    model = view.render()

    assert model["title"] == "Water Supply Alerts"
    assert model["active_summary"] == "2 active alerts"
    assert [f.label for f in model["filters"]] == [
        "All (4)", "Active (2)", "Investigating (1)", "Resolved (1)",
    ]
    assert [f.selected for f in model["filters"]] == [True, False, False, False]


@pytest.mark.asyncio
async def test_single_active_alert_summary(make_report):
    view = AlertListView(FakeStore([make_report(status="active"), make_report(status="resolved")]))
    await view.mount()
    assert view.render()["active_summary"] == "1 active alert"

    view = AlertListView(FakeStore([make_report(status="resolved")]))
    await view.mount()
    assert view.render()["active_summary"] is None


def test_filter_reports_is_pure(sample_reports):
    original = list(sample_reports)
    assert filter_reports(sample_reports, "resolved") == [sample_reports[2]]
    assert filter_reports(sample_reports, "all") == original
    assert sample_reports == original


def test_status_counts_cover_every_report(sample_reports):
    counts = status_counts(sample_reports)
    assert counts["all"] == counts["active"] + counts["investigating"] + counts["resolved"]


def test_render_card(make_report):
    report = make_report(title="Pipe burst", status="investigating", severity="critical",
                         location="5th Ave", reported_by="J. Doe", minutes_ago=125)
    card = render_card(report, NOW)

    assert card.title == "Pipe burst"
    assert card.status_label == "Investigating"
    assert card.status_color == "yellow"
    assert card.severity_label == "Critical severity"
    assert card.severity_color == "red"
    assert card.age == "2h ago"
    assert card.location == "5th Ave"
    assert card.reported_by == "J. Doe"
