from conftest import make_channel, make_item
from rssget.models import OrderingMode
from rssget.ordering import build_display_list


def _titles(display_list):
    return [entry.item.title for entry in display_list]


def _two_feeds():
    feed_a = make_channel("Feed A", [make_item("a2", 2), make_item("a1", 1)])
    feed_b = make_channel("Feed B", [make_item("b3", 3)])
    return [feed_a, feed_b]


def test_by_date_interleaves_channels_newest_first():
    display_list = build_display_list(_two_feeds(), OrderingMode.DATE)

    assert _titles(display_list) == ["b3", "a2", "a1"]
    assert display_list[0].channel.title == "Feed B"


def test_by_channel_groups_in_input_order():
    display_list = build_display_list(_two_feeds(), OrderingMode.CHANNEL)

    assert _titles(display_list) == ["a2", "a1", "b3"]
    assert [entry.channel.title for entry in display_list] == [
        "Feed A",
        "Feed A",
        "Feed B",
    ]


def test_by_channel_is_idempotent():
    channels = _two_feeds()

    first = build_display_list(channels, OrderingMode.CHANNEL)
    second = build_display_list(channels, OrderingMode.CHANNEL)

    assert first == second


def test_by_date_is_strictly_descending_for_distinct_dates():
    channels = [
        make_channel("One", [make_item("d5", 5), make_item("d9", 9)]),
        make_channel("Two", [make_item("d1", 1), make_item("d7", 7)]),
    ]

    display_list = build_display_list(channels, OrderingMode.DATE)
    dates = [entry.item.published for entry in display_list]

    assert all(newer > older for newer, older in zip(dates, dates[1:]))


def test_by_date_places_undated_items_last_in_encounter_order():
    channels = [
        make_channel("One", [make_item("undated-1"), make_item("d2", 2)]),
        make_channel("Two", [make_item("undated-2"), make_item("d4", 4)]),
    ]

    display_list = build_display_list(channels, OrderingMode.DATE)

    assert _titles(display_list) == ["d4", "d2", "undated-1", "undated-2"]


def test_by_date_ties_keep_encounter_order():
    channels = [
        make_channel("One", [make_item("first", 3), make_item("second", 3)]),
        make_channel("Two", [make_item("third", 3)]),
    ]

    display_list = build_display_list(channels, OrderingMode.DATE)

    assert _titles(display_list) == ["first", "second", "third"]


def test_feeds_without_any_dates_keep_feed_order():
    channels = [
        make_channel("One", [make_item("x"), make_item("y")]),
        make_channel("Two", [make_item("z")]),
    ]

    display_list = build_display_list(channels, OrderingMode.DATE)

    assert _titles(display_list) == ["x", "y", "z"]


def test_no_channels_yields_empty_list():
    assert build_display_list([], OrderingMode.DATE) == []
    assert build_display_list([], OrderingMode.CHANNEL) == []
