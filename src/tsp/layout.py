#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import logging
import math
import re
import unicodedata

from dataclasses import dataclass
from typing import Callable, Optional

from .config import TMpStrStyle, StyleLookup
from .database import SSession, SESSIONK
from .pdf import SColor, SRect, SDrawText, TInstr, DrectFromRect

g_logger = logging.getLogger(__name__)

TFnMeasure = Callable[[str, float, bool], float]	# (text, font points, bold) -> width
TFnFormat = Callable[[str], str]

STR_PLACEHOLDER_UNSUPPORTED = '[Hebrew text - view in app]'
STR_ELLIPSIS = '...'

class CScriptPolicy: # tag = scriptp
	"""
	Decides whether free text is in a script the export fonts can't draw.

	Text counts as unsupported once the share of its letters matching patUnsupported
	reaches uMin. uMin of 0 means any single match. unsupported title and notes are
	dropped, or shown as a placeholder line when fPlaceholder is set.
	"""

	s_patAsciiOnly = re.compile(r'[^\x20-\x7E]')
	s_patSpace = re.compile(r'\s+')

	def __init__(self, strPatUnsupported: str = '[\u0590-\u05FF]', uMin: float = 0.0, fPlaceholder: bool = False) -> None:
		self.patUnsupported = re.compile(strPatUnsupported)
		self.uMin = uMin
		self.fPlaceholder = fPlaceholder

	def FIsUnsupported(self, strText: str) -> bool:
		cUnsupported = len(self.patUnsupported.findall(strText))
		if not cUnsupported:
			return False

		cLetter = sum(1 for ch in strText if unicodedata.category(ch).startswith('L'))
		return cUnsupported >= self.uMin * max(cLetter, 1)

	def StrSanitize(self, strText: str) -> str:
		strText = self.s_patAsciiOnly.sub('', self.s_patSpace.sub(' ', strText))
		return self.s_patSpace.sub(' ', strText).strip()

@dataclass(frozen=True)
class SLine: # tag = line
	strText: str
	fBold: bool = False

@dataclass(frozen=True)
class SBoxLayout: # tag = boxl
	rect: SRect
	color: SColor
	uOpacity: float
	dPtFont: float
	tuLine: tuple[SLine, ...] = ()
	strLabel: str = ''			# day off only, drawn centered
	cLineDropped: int = 0

	@property
	def fDayOff(self) -> bool:
		return bool(self.strLabel)

class CBoxLayoutEngine: # tag = boxle
	"""lays out one session inside one box. units follow the measuring function (mm for CPdf)."""

	s_dSPadding = 1.0
	s_dYHeadRoom = 2.0
	s_dYLine = 2.9

	s_dPtFont = 5.0
	s_dPtFontDayOff = 7.0

	s_cChMin = 3

	s_strDayOff = 'Day Off'

	def __init__(
			self,
			fnMeasure: TFnMeasure,
			mpStrStyle: TMpStrStyle,
			fnStrTime: TFnFormat,
			fnStrTypeLabel: TFnFormat,
			scriptp: Optional[CScriptPolicy] = None,
			fnDYCap: Optional[Callable[[float], float]] = None) -> None:
		self.fnMeasure = fnMeasure
		self.mpStrStyle = mpStrStyle
		self.fnStrTime = fnStrTime
		self.fnStrTypeLabel = fnStrTypeLabel
		self.scriptp = scriptp or CScriptPolicy()
		self.fnDYCap = fnDYCap or (lambda dPtFont: dPtFont / 2.8)

	def CLineMax(self, dY: float) -> int:
		return max(0, math.floor((dY - 2 * self.s_dSPadding - self.s_dYHeadRoom) / self.s_dYLine))

	def LStrFreeText(self, strText: str) -> list[str]:
		"""display lines for a title/notes field. empty if there is nothing to show."""

		if not strText or not strText.strip():
			return []

		if self.scriptp.FIsUnsupported(strText):
			return [STR_PLACEHOLDER_UNSUPPORTED] if self.scriptp.fPlaceholder else []

		lStr = [self.scriptp.StrSanitize(strLine) for strLine in strText.splitlines()]
		return [strLine for strLine in lStr if strLine]

	def StrTypeLabel(self, strType: str) -> str:
		"""type label the fonts can draw. unknown types may carry any script."""

		strTypeLabel = self.fnStrTypeLabel(strType)
		if self.scriptp.FIsUnsupported(strTypeLabel):
			return STR_PLACEHOLDER_UNSUPPORTED
		return self.scriptp.StrSanitize(strTypeLabel)

	def LLineCandidate(self, session: SSession) -> list[SLine]:
		"""every line the session would like to show, highest priority first."""

		strTypeLabel = self.StrTypeLabel(session.strType)

		lLine: list[SLine] = [
			SLine(self.fnStrTime(session.strStartTime)),
			SLine(strTypeLabel, fBold=True),
		]

		lStrTitle = self.LStrFreeText(session.strTitle)
		if lStrTitle and ' '.join(lStrTitle) != strTypeLabel:
			lLine.append(SLine(' '.join(lStrTitle)))

		lLine.append(SLine(f'{session.cMinTotal}/{session.cMinHigh}m {session.cCourt}c'))

		if session.rpeCourt > 0:
			lLine.append(SLine(f'Court: {session.rpeCourt:g}/10'))

		if session.rpeGym > 0:
			lLine.append(SLine(f'Gym: {session.rpeGym:g}/10'))

		for strNote in self.LStrFreeText(session.strNotes):
			lLine.append(SLine(strNote))

		return [line for line in lLine if line.strText]

	def StrFitWidth(self, strText: str, dXMax: float, fBold: bool = False, dPtFont: Optional[float] = None) -> str:
		"""strText unchanged if it fits, else shortened with a trailing ellipsis."""

		dPtFont = dPtFont or self.s_dPtFont

		if self.fnMeasure(strText, dPtFont, fBold) <= dXMax:
			return strText

		# text at or under the floor is shown as is, overflow or not

		if len(strText) <= self.s_cChMin:
			return strText

		# keep the result strictly shorter than the input

		cCh = len(strText) - len(STR_ELLIPSIS) - 1
		cCh = max(cCh, 0)

		while cCh > self.s_cChMin and self.fnMeasure(strText[:cCh].rstrip() + STR_ELLIPSIS, dPtFont, fBold) > dXMax:
			cCh -= 1

		return strText[:cCh].rstrip() + STR_ELLIPSIS

	def BoxlLayout(self, session: SSession, rect: SRect) -> SBoxLayout:
		style = StyleLookup(self.mpStrStyle, session.strType)

		if session.sessionk == SESSIONK.DayOff:
			return SBoxLayout(rect, style.color, style.uAlpha, self.s_dPtFontDayOff, strLabel=self.s_strDayOff)

		lLine = self.LLineCandidate(session)
		cLineMax = self.CLineMax(rect.dY)
		cLineDropped = max(0, len(lLine) - cLineMax)

		if cLineDropped:
			g_logger.warning("session %s on %s: %d line(s) do not fit", session.id, session.strDate, cLineDropped)

		dXMax = rect.dX - 2 * self.s_dSPadding

		tuLine = tuple(
					SLine(self.StrFitWidth(line.strText, dXMax, line.fBold), line.fBold)
					for line in lLine[:cLineMax])

		return SBoxLayout(rect, style.color, style.uAlpha, self.s_dPtFont, tuLine, cLineDropped=cLineDropped)

	def LInstrDraw(self, boxl: SBoxLayout) -> list[TInstr]:
		"""tint first, then text on top."""

		rect = boxl.rect
		lInstr: list[TInstr] = [DrectFromRect(rect, boxl.color, boxl.uOpacity)]

		if boxl.fDayOff:
			dXText = self.fnMeasure(boxl.strLabel, boxl.dPtFont, True)
			x = rect.x + (rect.dX - dXText) / 2.0
			y = rect.y + rect.dY / 2.0 + self.fnDYCap(boxl.dPtFont) / 2.0
			lInstr.append(SDrawText(x, y, boxl.strLabel, boxl.dPtFont, True, boxl.color))
			return lInstr

		x = rect.x + self.s_dSPadding
		y = rect.y + self.s_dSPadding + self.s_dYHeadRoom

		for line in boxl.tuLine:
			lInstr.append(SDrawText(x, y, line.strText, boxl.dPtFont, line.fBold, boxl.color))
			y += self.s_dYLine

		return lInstr

	def LInstrLayout(self, session: SSession, rect: SRect) -> list[TInstr]:
		return self.LInstrDraw(self.BoxlLayout(session, rect))
