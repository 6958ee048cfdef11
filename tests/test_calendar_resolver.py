"""
Tests for the calendar clamp and override rules.
"""
import pytest

from conftest import TODAY, day
from cornerstone.services.calendar_resolver import CalendarResolver


@pytest.fixture
def resolver():
    return CalendarResolver(TODAY)


def test_completed_item_uses_actual_dates(resolver, make_node):
    node = make_node('A', 3, status='completed', actual_start_date=day(-9), actual_end_date=day(-5))

    resolution = resolver.resolve(node, day(1), day(4))

    assert (resolution.start, resolution.end) == (day(-9), day(-5))
    assert resolution.is_late is False
    assert resolution.rule == CalendarResolver.ACTUAL_DATES


def test_completed_item_without_actual_end_keeps_raw_dates(resolver, make_node):
    node = make_node('A', 3, status='completed', actual_start_date=day(-9))

    resolution = resolver.resolve(node, day(1), day(4))

    assert (resolution.start, resolution.end) == (day(1), day(4))
    assert resolution.rule is None


def test_not_started_in_past_moves_to_today(resolver, make_node):
    node = make_node('A', 3)

    resolution = resolver.resolve(node, day(-1), day(2))

    assert (resolution.start, resolution.end) == (day(0), day(3))
    assert resolution.is_late is True
    assert resolution.rule == CalendarResolver.NOT_STARTED_FLOOR


def test_not_started_keeps_span_when_shifted(resolver, make_node):
    resolution = resolver.resolve(make_node('A', 4), day(-10), day(-6))
    assert (resolution.end - resolution.start).days == 4


def test_not_started_today_is_not_late(resolver, make_node):
    resolution = resolver.resolve(make_node('A', 2), day(0), day(2))

    assert (resolution.start, resolution.end) == (day(0), day(2))
    assert resolution.is_late is False


def test_in_progress_overdue_ends_today(resolver, make_node):
    node = make_node('A', 3, status='in_progress')

    resolution = resolver.resolve(node, day(-5), day(-2))

    assert (resolution.start, resolution.end) == (day(-5), day(0))
    assert resolution.is_late is True
    assert resolution.rule == CalendarResolver.IN_PROGRESS_FLOOR


def test_in_progress_on_track_is_unchanged(resolver, make_node):
    node = make_node('A', 3, status='in_progress')

    resolution = resolver.resolve(node, day(-1), day(2))

    assert (resolution.start, resolution.end) == (day(-1), day(2))
    assert resolution.is_late is False


def test_blocked_item_is_not_clamped(resolver, make_node):
    resolution = resolver.resolve(make_node('A', 2, status='blocked'), day(-4), day(-2))
    assert (resolution.start, resolution.end) == (day(-4), day(-2))


@pytest.mark.parametrize('status', ['not_started', 'in_progress', 'blocked'])
@pytest.mark.parametrize('offset', [-7, -1, 0, 3])
def test_rules_only_move_dates_later(resolver, make_node, status, offset):
    raw_start, raw_end = day(offset), day(offset + 2)

    resolution = resolver.resolve(make_node('A', 2, status=status), raw_start, raw_end)

    assert resolution.start >= raw_start
    assert resolution.end >= raw_end


@pytest.mark.parametrize('status', ['not_started', 'in_progress', 'completed'])
def test_resolving_twice_is_stable(resolver, make_node, status):
    node = make_node('A', 2, status=status, actual_start_date=day(-8), actual_end_date=day(-6))

    first = resolver.resolve(node, day(-3), day(-1))
    second = resolver.resolve(node, first.start, first.end)

    assert (second.start, second.end) == (first.start, first.end)
