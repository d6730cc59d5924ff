"""Tests for the formatting strategies."""

import datetime

import pytest

from tsp.database import SLOT
from tsp.loc import CFormatter, StrRemoveOddSpaces


@pytest.mark.parametrize("strTime, slot", [
    ('00:00', SLOT.AM),
    ('09:30', SLOT.AM),
    ('11:59', SLOT.AM),
    ('12:00', SLOT.PM),
    ('23:15', SLOT.PM),
    ('18:15:00', SLOT.PM),
    ('2024-06-03T18:15:00Z', SLOT.PM),
    ('', SLOT.AM),
    ('soon', SLOT.AM),
    ('25:00', SLOT.AM),
    ('2024-06-03', SLOT.AM),
])
def test_slot_from_time(fmtr, strTime, slot):
    assert fmtr.SlotFromTime(strTime) == slot


@pytest.mark.parametrize("strTime, strExpected", [
    ('09:30', '09:30'),
    ('7:05', '07:05'),
    ('18:15:42', '18:15'),
    ('2024-06-03T06:45:00', '06:45'),
    ('', '--:--'),
    ('noon', '--:--'),
])
def test_time_display(fmtr, strTime, strExpected):
    assert fmtr.StrTime(strTime) == strExpected


@pytest.mark.parametrize("strType, strLabel", [
    ('Practice', 'Practice'),
    ('DayOff', 'Day Off'),
    ('SplitPractice', 'Split Practice'),
    ('', ''),
])
def test_type_label_splits_camel_case(fmtr, strType, strLabel):
    assert fmtr.StrTypeLabel(strType) == strLabel


def test_header_dates(fmtr, june3):
    assert fmtr.StrDate(june3) == 'Jun 3, 2024'
    assert fmtr.StrDateRange(june3, datetime.date(2024, 7, 14)) == 'Jun 3, 2024 - Jul 14, 2024'


def test_weekdays_start_on_sunday(fmtr):
    assert fmtr.LStrWeekday() == ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']


def test_weekdays_follow_locale():
    lStr = CFormatter('de_DE').LStrWeekday()

    assert len(lStr) == 7
    assert lStr[0].startswith('So')
    assert lStr[1].startswith('Mo')


def test_odd_spaces_become_plain_spaces():
    assert StrRemoveOddSpaces('9:30\u202fAM\u00a0x\u2009y') == '9:30 AM x y'
