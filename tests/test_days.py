"""Tests for calendar week expansion and session-to-cell assignment."""

import datetime

import pytest

from conftest import Session
from tsp.database import SLOT
from tsp.days import SCalendarDay, InvalidRange, IDayOfWeek, LDateExpand, MpDateCalday, CaldayAssign


def SlotNoon(strTime: str) -> SLOT:
    return SLOT.PM if strTime >= '12:00' else SLOT.AM


def test_day_of_week_counts_from_sunday():
    assert IDayOfWeek(datetime.date(2024, 6, 2)) == 0  # sunday
    assert IDayOfWeek(datetime.date(2024, 6, 3)) == 1
    assert IDayOfWeek(datetime.date(2024, 6, 8)) == 6  # saturday


def test_single_monday_expands_to_its_week(june3):
    lDate = LDateExpand(june3, june3)

    assert lDate[0] == datetime.date(2024, 6, 2)
    assert lDate[-1] == datetime.date(2024, 6, 8)
    assert len(lDate) == 7
    assert lDate == sorted(lDate)


def test_aligned_range_is_unchanged():
    dateMin = datetime.date(2024, 6, 2)
    dateMax = datetime.date(2024, 6, 22)

    lDate = LDateExpand(dateMin, dateMax)

    assert lDate[0] == dateMin
    assert lDate[-1] == dateMax
    assert len(lDate) == 21


@pytest.mark.parametrize("cDaySpan", [0, 1, 5, 6, 7, 13, 30, 41, 365])
def test_expansion_covers_range_in_full_weeks(cDaySpan):
    for cDayOffset in range(7):
        dateMin = datetime.date(2023, 12, 28) + datetime.timedelta(days=cDayOffset)
        dateMax = dateMin + datetime.timedelta(days=cDaySpan)

        lDate = LDateExpand(dateMin, dateMax)

        assert len(lDate) % 7 == 0
        assert lDate[0].weekday() == 6  # sunday
        assert lDate[-1].weekday() == 5  # saturday
        assert lDate[0] <= dateMin and dateMax <= lDate[-1]
        assert len(lDate) - (cDaySpan + 1) < 14
        assert all((dateNext - date).days == 1 for date, dateNext in zip(lDate, lDate[1:]))


def test_start_after_end_is_invalid_range(june3):
    with pytest.raises(InvalidRange):
        LDateExpand(june3, june3 - datetime.timedelta(days=1))


def test_invalid_range_is_a_value_error():
    assert issubclass(InvalidRange, ValueError)


def test_day_off_suppresses_slot_sessions(june3):
    lSession = [
        Session('p1', '2024-06-03', 'Practice', strStartTime='09:00'),
        Session('off', '2024-06-03', 'DayOff'),
        Session('p2', '2024-06-03', 'Practice', strStartTime='17:00'),
    ]

    calday = CaldayAssign(june3, lSession, SlotNoon)

    assert calday.sessionDayOff.id == 'off'
    assert calday.sessionAm is None
    assert calday.sessionPm is None


def test_first_day_off_wins(june3):
    lSession = [Session('off1', '2024-06-03', 'DayOff'), Session('off2', '2024-06-03', 'DayOff')]

    assert CaldayAssign(june3, lSession, SlotNoon).sessionDayOff.id == 'off1'


def test_explicit_slot_beats_start_time(june3):
    lSession = [
        Session('late', '2024-06-03', strStartTime='18:00', slot=SLOT.AM),
        Session('early', '2024-06-03', strStartTime='08:00', slot=SLOT.PM),
    ]

    calday = CaldayAssign(june3, lSession, SlotNoon)

    assert calday.sessionAm.id == 'late'
    assert calday.sessionPm.id == 'early'


def test_slot_falls_back_to_classifier(june3):
    lStrSeen = []

    def SlotRecord(strTime):
        lStrSeen.append(strTime)
        return SlotNoon(strTime)

    lSession = [Session('a', '2024-06-03', strStartTime='07:30'), Session('b', '2024-06-03', strStartTime='15:45')]

    calday = CaldayAssign(june3, lSession, SlotRecord)

    assert lStrSeen == ['07:30', '15:45']
    assert calday.sessionAm.id == 'a'
    assert calday.sessionPm.id == 'b'


def test_first_session_in_a_slot_is_kept(june3):
    lSession = [
        Session('first', '2024-06-03', strStartTime='08:00'),
        Session('second', '2024-06-03', strStartTime='10:00'),
    ]

    calday = CaldayAssign(june3, lSession, SlotNoon)

    assert calday.sessionAm.id == 'first'
    assert calday.sessionPm is None


def test_mapping_covers_every_day_and_flags_padding(june3):
    lDate = LDateExpand(june3, june3)
    lSession = [Session('p', '2024-06-03'), Session('elsewhere', '2024-07-01')]

    mpDateCalday = MpDateCalday(lSession, lDate, SlotNoon, june3, june3)

    assert list(mpDateCalday) == lDate
    assert mpDateCalday[june3].sessionAm.id == 'p'
    assert not mpDateCalday[june3].fOutsideRange

    for date, calday in mpDateCalday.items():
        if date != june3:
            assert calday.fOutsideRange
            assert calday.fEmpty


def test_mapping_defaults_range_to_the_day_list():
    lDate = LDateExpand(datetime.date(2024, 6, 2), datetime.date(2024, 6, 8))

    mpDateCalday = MpDateCalday([], lDate, SlotNoon)

    assert not any(calday.fOutsideRange for calday in mpDateCalday.values())
    assert MpDateCalday([], [], SlotNoon) == {}


def test_day_never_holds_day_off_and_slot_session():
    date = datetime.date(2024, 6, 3)
    sessionOff = Session('off', '2024-06-03', 'DayOff')
    sessionPractice = Session('p', '2024-06-03')

    with pytest.raises(AssertionError):
        SCalendarDay(date, sessionDayOff=sessionOff, sessionAm=sessionPractice)


def test_calendar_day_display_fields(june3):
    calday = SCalendarDay(june3)

    assert calday.strDate == '2024-06-03'
    assert calday.dayNumber == 3
    assert calday.fEmpty
