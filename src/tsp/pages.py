#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import math

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from .pdf import SPoint, SRect

T = TypeVar('T')

def TuRowCol(iDay: int) -> tuple[int, int]:
	"""grid row and column (0 = sunday) of the iDay'th cell of a page."""
	return iDay // 7, iDay % 7

@dataclass(frozen=True)
class SPage(Generic[T]): # tag = page
	iPage: int			# 1 based
	cPage: int
	tuDay: tuple[T, ...]

	@property
	def cWeek(self) -> int:
		return math.ceil(len(self.tuDay) / 7)

	@property
	def fMultiPage(self) -> bool:
		return self.cPage > 1

	def LTuRectDay(self, posOrigin: SPoint, dXCol: float, dYRow: float) -> list[tuple[SRect, T]]:
		"""each day's cell rectangle, in day order."""

		lTuRectDay: list[tuple[SRect, T]] = []

		for iDay, day in enumerate(self.tuDay):
			iRow, iCol = TuRowCol(iDay)
			rectCell = SRect(posOrigin.x + iCol * dXCol, posOrigin.y + iRow * dYRow, dXCol, dYRow)
			lTuRectDay.append((rectCell, day))

		return lTuRectDay

def CWeek(cDay: int) -> int:
	return math.ceil(cDay / 7)

def CPageFromCDay(cDay: int, cWeekPerPage: int) -> int:
	return math.ceil(CWeek(cDay) / cWeekPerPage)

def LPagePaginate(seqDay: Sequence[T], cWeekPerPage: int) -> list[SPage[T]]:
	"""split days into pages of cWeekPerPage weeks. the last page is not padded."""

	if cWeekPerPage < 1:
		raise ValueError(f"weeks per page must be at least 1, not {cWeekPerPage}")

	cDayPerPage = cWeekPerPage * 7
	cPage = CPageFromCDay(len(seqDay), cWeekPerPage)

	return [
		SPage(iPage + 1, cPage, tuple(seqDay[iPage * cDayPerPage : (iPage + 1) * cDayPerPage]))
		for iPage in range(cPage)
	]
