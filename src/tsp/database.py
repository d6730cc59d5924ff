#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import datetime
import logging
import openpyxl
import yaml

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Iterable, Optional, cast

g_logger = logging.getLogger(__name__)

TExcelRow = dict[str, str]				# tag = xlrow
TExcelSheet = list[TExcelRow]			# tag = xls

class SessionSourceError(ValueError):
	"""a session file is unreadable or holds a malformed row."""

class SESSIONK(StrEnum): # tag = sessionk
	Practice = 'Practice'
	Game = 'Game'
	DayOff = 'DayOff'
	SplitPractice = 'SplitPractice'
	Meeting = 'Meeting'
	Recovery = 'Recovery'
	Travel = 'Travel'
	Default = 'Default'

class SLOT(StrEnum): # tag = slot
	AM = 'AM'
	PM = 'PM'

def SlotFromStr(strSlot: Optional[str]) -> Optional[SLOT]:
	if not strSlot:
		return None
	try:
		return SLOT(strSlot.strip().upper())
	except ValueError:
		return None

@dataclass(frozen=True)
class SSession: # tag = session
	"""one scheduled activity, as handed over by the persistence layer."""

	id: str
	strDate: str						# YYYY-MM-DD
	strType: str = ''
	slot: Optional[SLOT] = None
	strStartTime: str = ''
	strTitle: str = ''
	strNotes: str = ''
	cMinTotal: int = 0
	cMinHigh: int = 0
	cCourt: int = 0
	rpeCourt: float = 0
	rpeGym: float = 0

	@property
	def sessionk(self) -> SESSIONK:
		try:
			return SESSIONK(self.strType)
		except ValueError:
			return SESSIONK.Default

	@property
	def fDayOff(self) -> bool:
		return self.sessionk == SESSIONK.DayOff

def StrIsoFromVal(val: Any) -> str:
	"""YYYY-MM-DD from a date, datetime or string cell."""

	if isinstance(val, datetime.datetime):
		return val.date().isoformat()
	if isinstance(val, datetime.date):
		return val.isoformat()
	strVal = str(val).strip()
	# spreadsheets hand back '2024-06-03 00:00:00' for date cells
	return strVal[:10]

def StrTimeFromVal(val: Any) -> str:
	if val is None:
		return ''
	if isinstance(val, datetime.time):
		return val.strftime('%H:%M')
	if isinstance(val, datetime.datetime):
		return val.isoformat()
	if isinstance(val, int) and not isinstance(val, bool):
		# yaml 1.1 reads unquoted 14:30 as base 60
		return f'{val // 60:02d}:{val % 60:02d}'
	return str(val).strip()

def NumFromVal(val: Any, strField: str, idSession: str) -> float:
	if val is None or val == '':
		return 0
	try:
		return float(val)
	except (TypeError, ValueError) as exc:
		raise SessionSourceError(f"session {idSession}: bad {strField} value {val!r}") from exc

def SessionFromXlrow(xlrow: dict[str, Any]) -> SSession:
	"""build a session from a row keyed by lower case column names."""

	valId = xlrow.get('id')
	idSession = '' if valId is None else str(valId).strip()
	if not idSession:
		raise SessionSourceError(f"session row without id: {xlrow}")

	valDate = xlrow.get('date')
	if not valDate:
		raise SessionSourceError(f"session {idSession}: missing date")

	strDate = StrIsoFromVal(valDate)
	try:
		datetime.date.fromisoformat(strDate)
	except ValueError as exc:
		raise SessionSourceError(f"session {idSession}: bad date {valDate!r}") from exc

	return SSession(
			id = idSession,
			strDate = strDate,
			strType = str(xlrow.get('type') or '').strip(),
			slot = SlotFromStr(cast(Optional[str], xlrow.get('slot'))),
			strStartTime = StrTimeFromVal(xlrow.get('start-time')),
			strTitle = str(xlrow.get('title') or ''),
			strNotes = str(xlrow.get('notes') or ''),
			cMinTotal = int(NumFromVal(xlrow.get('total-minutes'), 'total-minutes', idSession)),
			cMinHigh = int(NumFromVal(xlrow.get('high-intensity-minutes'), 'high-intensity-minutes', idSession)),
			cCourt = int(NumFromVal(xlrow.get('courts'), 'courts', idSession)),
			rpeCourt = NumFromVal(xlrow.get('rpe-court'), 'rpe-court', idSession),
			rpeGym = NumFromVal(xlrow.get('rpe-gym'), 'rpe-gym', idSession))

class CSessionYamlLoader(yaml.SafeLoader): # tag = loader
	"""safe loader without yaml 1.1 booleans, so ids like off/no/yes stay strings."""

CSessionYamlLoader.yaml_implicit_resolvers = {
	ch: [(strTag, pat) for strTag, pat in lTuResolver if strTag != 'tag:yaml.org,2002:bool']
	for ch, lTuResolver in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

class CSessionDataBase: # tag = db
	"""sessions read from an exported spreadsheet (.xlsx) or yaml list (.yaml/.yml)."""

	s_strSheet = 'sessions'

	def __init__(self, pathFile: Path) -> None:
		self.pathFile = pathFile

		strSuffix = pathFile.suffix.lower()

		if strSuffix == '.xlsx':
			lXlrow = self.XlsLoad()
		elif strSuffix in ('.yaml', '.yml'):
			lXlrow = self.LXlrowLoadYaml()
		else:
			raise SessionSourceError(f"unsupported session file type: {pathFile.name}")

		self.lSession: list[SSession] = [SessionFromXlrow(xlrow) for xlrow in lXlrow]

		g_logger.debug("loaded %d sessions from %s", len(self.lSession), pathFile)

	def XlsLoad(self) -> TExcelSheet:
		wb = openpyxl.load_workbook(filename = str(self.pathFile), data_only=True)

		# a sheet named 'sessions' wins, otherwise the first sheet

		lWs = [ws for ws in wb.worksheets if str(ws.title).lower() == self.s_strSheet] or wb.worksheets[:1]

		xls: TExcelSheet = []

		for ws in lWs:
			lStrKey: list[str] = []
			for row in ws.iter_rows(values_only=True):
				lValRow = list(row)
				if not lStrKey:
					while lValRow and not lValRow[-1]:
						del lValRow[-1]
					if not all(lValRow):
						raise SessionSourceError(f'header row has an empty value: {lValRow}')
					lStrKey = [str(val).strip().lower() for val in lValRow]
				elif any(val is not None for val in lValRow):
					xls.append(dict(zip(lStrKey, lValRow)))

		return xls

	def LXlrowLoadYaml(self) -> list[dict[str, Any]]:
		with open(self.pathFile, encoding='utf-8') as file:
			objYaml = yaml.load(file, Loader=CSessionYamlLoader)

		if objYaml is None:
			return []

		if isinstance(objYaml, dict):
			objYaml = objYaml.get(self.s_strSheet, [])

		if not isinstance(objYaml, list):
			raise SessionSourceError(f"{self.pathFile.name}: expected a list of sessions")

		lXlrow: list[dict[str, Any]] = []

		for iObj, obj in enumerate(objYaml):
			if not isinstance(obj, dict):
				raise SessionSourceError(f"{self.pathFile.name}: session {iObj + 1} is not a mapping: {obj!r}")
			lXlrow.append({str(key).lower(): val for key, val in obj.items()})

		return lXlrow

def LSessionInRange(iterSession: Iterable[SSession], dateMin: datetime.date, dateMax: datetime.date) -> list[SSession]:
	strMin = dateMin.isoformat()
	strMax = dateMax.isoformat()
	return [session for session in iterSession if strMin <= session.strDate <= strMax]

def CSessionInRange(iterSession: Iterable[SSession], dateMin: datetime.date, dateMax: datetime.date) -> int:
	return len(LSessionInRange(iterSession, dateMin, dateMax))
