#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import arrow
import babel.dates
import datetime
import re

from babel import Locale
from dateutil import parser as dateparser
from typing import Optional

from .database import SLOT

def StrRemoveOddSpaces(strText: str) -> str:
	# our fonts don't have these weirdo spaces
	return strText.translate({ord(ch):' ' for ch in '\u00a0\u2009\u202f'})

class CFormatter: # tag = fmtr
	"""
	Formatting strategies handed to the layout pipeline.

	Slot classification, time display and type labels are plain bound methods,
	so callers can swap any of them for their own callable.
	"""

	s_patTime = re.compile(r'^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$')
	s_patCamel = re.compile(r'([a-z])([A-Z])')

	s_strTimeInvalid = '--:--'

	def __init__(self, strLocale: str = 'en_US') -> None:
		self.strLocale = strLocale
		self.locale = Locale.parse(strLocale)

	def TimeFromStr(self, strTime: str) -> Optional[datetime.time]:
		"""a wall clock time from 'HH:MM', 'HH:MM:SS' or an ISO timestamp. None if it is neither."""

		if not strTime:
			return None

		strTime = strTime.strip()

		if mat := self.s_patTime.match(strTime):
			return datetime.time(int(mat[1]), int(mat[2]))

		# bare dates parse too, but carry no time of day

		if 'T' not in strTime and ' ' not in strTime:
			return None

		try:
			return dateparser.isoparse(strTime).time()
		except ValueError:
			return None

	def SlotFromTime(self, strTime: str) -> SLOT:
		time = self.TimeFromStr(strTime)
		if time is None:
			return SLOT.AM
		return SLOT.PM if time.hour >= 12 else SLOT.AM

	def StrTime(self, strTime: str) -> str:
		time = self.TimeFromStr(strTime)
		if time is None:
			return self.s_strTimeInvalid
		return babel.dates.format_time(time, 'HH:mm', locale=self.locale)

	def StrTypeLabel(self, strType: str) -> str:
		if not strType:
			return ''
		return self.s_patCamel.sub(r'\1 \2', strType)

	def StrDate(self, date: datetime.date) -> str:
		return StrRemoveOddSpaces(babel.dates.format_skeleton('yMMMd', arrow.get(date).datetime, locale=self.locale))

	def StrDateRange(self, dateMin: datetime.date, dateMax: datetime.date) -> str:
		return f'{self.StrDate(dateMin)} - {self.StrDate(dateMax)}'

	def LStrWeekday(self) -> list[str]:
		"""abbreviated day names, sunday first."""

		# babel numbers days from monday = 0

		mpIdayStrDayOfWeek = babel.dates.get_day_names('abbreviated', locale=self.locale)
		return [mpIdayStrDayOfWeek[(iDay + 6) % 7] for iDay in range(7)]
