#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import arrow
import datetime
import logging

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .database import SSession, SLOT

g_logger = logging.getLogger(__name__)

TFnSlot = Callable[[str], SLOT]

class InvalidRange(ValueError):
	"""start date falls after end date."""

def IDayOfWeek(date: datetime.date) -> int:
	"""0 = sunday .. 6 = saturday"""
	return (date.weekday() + 1) % 7

def LDateExpand(dateMin: datetime.date, dateMax: datetime.date) -> list[datetime.date]:
	"""every date of the full sunday..saturday weeks covering [dateMin, dateMax]."""

	if dateMin > dateMax:
		raise InvalidRange(f"start {dateMin.isoformat()} is after end {dateMax.isoformat()}")

	tMin = arrow.get(dateMin).shift(days=-IDayOfWeek(dateMin))
	tMax = arrow.get(dateMax).shift(days=6 - IDayOfWeek(dateMax))

	lDate = [tDay.date() for tDay in arrow.Arrow.range('day', tMin, tMax)]

	assert len(lDate) % 7 == 0

	return lDate

@dataclass(frozen=True)
class SCalendarDay: # tag = calday
	date: datetime.date
	fOutsideRange: bool = False
	sessionDayOff: Optional[SSession] = None
	sessionAm: Optional[SSession] = None
	sessionPm: Optional[SSession] = None

	def __post_init__(self) -> None:
		assert self.sessionDayOff is None or (self.sessionAm is None and self.sessionPm is None)

	@property
	def strDate(self) -> str:
		return self.date.isoformat()

	@property
	def dayNumber(self) -> int:
		return self.date.day

	@property
	def fEmpty(self) -> bool:
		return self.sessionDayOff is None and self.sessionAm is None and self.sessionPm is None

def CaldayAssign(date: datetime.date, lSessionDate: list[SSession], fnSlot: TFnSlot, fOutsideRange: bool = False) -> SCalendarDay:
	"""fill one day's cell from the sessions on that date, in source order."""

	for session in lSessionDate:
		if session.fDayOff:
			if len(lSessionDate) > 1:
				g_logger.debug("%s: day off %s suppresses %d other session(s)", date, session.id, len(lSessionDate) - 1)
			return SCalendarDay(date, fOutsideRange, sessionDayOff=session)

	mpSlotSession: dict[SLOT, SSession] = {}

	for session in lSessionDate:
		slot = session.slot or fnSlot(session.strStartTime)

		# first come, first served

		if slot in mpSlotSession:
			g_logger.debug("%s: %s slot already holds %s, dropping %s", date, slot, mpSlotSession[slot].id, session.id)
			continue

		mpSlotSession[slot] = session

	return SCalendarDay(
			date,
			fOutsideRange,
			sessionAm = mpSlotSession.get(SLOT.AM),
			sessionPm = mpSlotSession.get(SLOT.PM))

def MpDateCalday(
		iterSession: Iterable[SSession],
		lDate: list[datetime.date],
		fnSlot: TFnSlot,
		dateMin: Optional[datetime.date] = None,
		dateMax: Optional[datetime.date] = None) -> dict[datetime.date, SCalendarDay]:
	"""
	map each of lDate to its calendar cell.

	days before dateMin or after dateMax (defaulting to the ends of lDate) are
	flagged as outside the range. they still get sessions if any are passed in.
	"""

	if not lDate:
		return {}

	dateMin = dateMin or lDate[0]
	dateMax = dateMax or lDate[-1]

	mpStrDateLSession: dict[str, list[SSession]] = {}

	for session in iterSession:
		mpStrDateLSession.setdefault(session.strDate, []).append(session)

	return {
		date: CaldayAssign(
				date,
				mpStrDateLSession.get(date.isoformat(), []),
				fnSlot,
				fOutsideRange = not (dateMin <= date <= dateMax))
		for date in lDate
	}
