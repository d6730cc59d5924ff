#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import arrow
import datetime
import fpdf
import logging
import platform
import typer

from pathlib import Path
from typing import Optional

from .config import SDocumentArgs, DocaFromStrName
from .database import SSession, CSessionDataBase, SessionSourceError, LSessionInRange, CSessionInRange
from .days import SCalendarDay, InvalidRange, LDateExpand, MpDateCalday
from .layout import CBoxLayoutEngine, CScriptPolicy
from .loc import CFormatter
from .pages import SPage, LPagePaginate
from .pdf import CPdf, EmitError, SPoint, SRect, SAddPage, SDrawText, TInstr, DrectFromRect
from .pdf import colorBlack, colorDimGrey, colorOutside

g_logger = logging.getLogger(__name__)

class CScheduleExport: # tag = export
	"""
	Turns a session list and a date range into a paginated calendar document.

	LInstrBuild() is pure: the same sessions, range and document args always give
	the same instruction list. PathExport() replays that list onto a fresh CPdf
	and writes it out.
	"""

	s_dSMargin = 10.0

	s_dPtTitle = 14.0
	s_dYTitle = 6.0

	s_dPtWeekday = 7.0
	s_dYWeekday = 15.0
	s_dXWeekday = 3.0

	s_dYGridTop = 20.0
	s_dYRowMax = 70.0

	s_dPtDayNumber = 10.0
	s_dXDayNumber = 4.0
	s_dYDayNumber = 6.0
	s_dYCellHeader = 8.0		# day number band above the session boxes
	s_dSCellPadding = 1.0

	def __init__(self, doca: SDocumentArgs, fmtr: Optional[CFormatter] = None) -> None:
		self.doca = doca
		self.fmtr = fmtr or CFormatter(doca.strLocale)

		# measuring only. each export draws on its own CPdf

		self.pdfMeasure = self.PdfNew()

		self.boxle = CBoxLayoutEngine(
						self.pdfMeasure.DXStringWidth,
						doca.mpStrStyle,
						self.fmtr.StrTime,
						self.fmtr.StrTypeLabel,
						CScriptPolicy(doca.strPatUnsupported, doca.uUnsupportedMin, doca.fPlaceholderUnsupported),
						self.pdfMeasure.DYCap)

		self.dXPage, self.dYPage = self.pdfMeasure.TuDxDyPage()
		self.dXCol = (self.dXPage - 2 * self.s_dSMargin) / 7
		self.dYRow = min(
						self.s_dYRowMax,
						(self.dYPage - self.s_dSMargin - self.s_dYGridTop - self.s_dSMargin) / self.doca.cWeekPerPage)

	def PdfNew(self) -> CPdf:
		pdf = CPdf(self.doca.strOrientation, self.doca.fmt)

		pdf.set_title(self.doca.strTitle)
		pdf.set_subject('training schedule')
		pdf.set_creator(f'python v{platform.python_version()}, fpdf2 v{fpdf.__version__}')
		pdf.set_lang(self.doca.strLocale.split('_')[0])

		return pdf

	def StrFile(self, dateMin: datetime.date, dateMax: datetime.date) -> str:
		return f'{self.doca.strPrefix}-{dateMin.isoformat()}-to-{dateMax.isoformat()}.{self.doca.strExt}'

	def PathOutput(self, dateMin: datetime.date, dateMax: datetime.date) -> Path:
		return self.doca.pathDirDest / self.StrFile(dateMin, dateMax)

	def LPageBuild(self, iterSession: list[SSession], dateMin: datetime.date, dateMax: datetime.date) -> list[SPage[SCalendarDay]]:
		lDate = LDateExpand(dateMin, dateMax)

		# padding days outside the range stay empty

		lSessionRange = LSessionInRange(iterSession, dateMin, dateMax)
		mpDateCalday = MpDateCalday(lSessionRange, lDate, self.fmtr.SlotFromTime, dateMin, dateMax)

		return LPagePaginate(list(mpDateCalday.values()), self.doca.cWeekPerPage)

	def StrHeader(self, page: SPage, dateMin: datetime.date, dateMax: datetime.date) -> str:
		strHeader = f'{self.doca.strTitle}: {self.fmtr.StrDateRange(dateMin, dateMax)}'
		if page.fMultiPage:
			strHeader += f' (Page {page.iPage}/{page.cPage})'
		return strHeader

	def LInstrHeader(self, page: SPage, dateMin: datetime.date, dateMax: datetime.date) -> list[TInstr]:
		lInstr: list[TInstr] = [
			SDrawText(
				self.s_dSMargin,
				self.s_dSMargin + self.s_dYTitle,
				self.StrHeader(page, dateMin, dateMax),
				self.s_dPtTitle,
				False,
				colorBlack),
		]

		yWeekday = self.s_dSMargin + self.s_dYWeekday

		for iCol, strWeekday in enumerate(self.fmtr.LStrWeekday()):
			xWeekday = self.s_dSMargin + self.dXCol * iCol + self.s_dXWeekday
			lInstr.append(SDrawText(xWeekday, yWeekday, strWeekday, self.s_dPtWeekday, False, colorDimGrey))

		return lInstr

	def LInstrCell(self, rectCell: SRect, calday: SCalendarDay) -> list[TInstr]:
		lInstr: list[TInstr] = [
			DrectFromRect(rectCell, colorBlack, fFill=False),
			SDrawText(
				rectCell.x + self.s_dXDayNumber,
				rectCell.y + self.s_dYDayNumber,
				str(calday.dayNumber),
				self.s_dPtDayNumber,
				False,
				colorOutside if calday.fOutsideRange else colorBlack),
		]

		dS = self.s_dSCellPadding
		rectBoxes = rectCell.Copy().Stretch(dXLeft=dS, dYTop=self.s_dYCellHeader, dXRight=-dS, dYBottom=-dS)

		if calday.sessionDayOff:
			rectDayOff = rectBoxes.Copy(dY=max(0.0, rectCell.dY - self.s_dYCellHeader - 2 * dS))
			lInstr += self.boxle.LInstrLayout(calday.sessionDayOff, rectDayOff)
			return lInstr

		# am on top, pm below, each half the room under the day number. rows too
		#	short for the day number band get empty boxes

		dYSlot = max(0.0, (rectCell.dY - self.s_dYCellHeader - 2 * dS) / 2.0)

		if calday.sessionAm:
			rectAm = rectBoxes.Copy(dY=dYSlot)
			lInstr += self.boxle.LInstrLayout(calday.sessionAm, rectAm)

		if calday.sessionPm:
			rectPm = rectBoxes.Copy(dY=dYSlot).Shift(dY=dYSlot + dS)
			lInstr += self.boxle.LInstrLayout(calday.sessionPm, rectPm)

		return lInstr

	def LInstrBuild(self, lSession: list[SSession], dateMin: datetime.date, dateMax: datetime.date) -> list[TInstr]:
		"""every draw instruction for the document, pages in order."""

		lPage = self.LPageBuild(lSession, dateMin, dateMax)

		posGrid = SPoint(self.s_dSMargin, self.s_dSMargin + self.s_dYGridTop)

		lInstr: list[TInstr] = []

		for page in lPage:
			lInstr.append(SAddPage())
			lInstr += self.LInstrHeader(page, dateMin, dateMax)

			for rectCell, calday in page.LTuRectDay(posGrid, self.dXCol, self.dYRow):
				lInstr += self.LInstrCell(rectCell, calday)

		g_logger.debug("%d page(s), %d instruction(s) for %s..%s", len(lPage), len(lInstr), dateMin, dateMax)

		return lInstr

	def PathExport(self, lSession: list[SSession], dateMin: datetime.date, dateMax: datetime.date) -> Path:
		lInstr = self.LInstrBuild(lSession, dateMin, dateMax)

		pdf = self.PdfNew()
		pdf.set_creation_date(arrow.now().datetime)
		pdf.Render(lInstr)

		return pdf.Emit(self.PathOutput(dateMin, dateMax))

# command line

app = typer.Typer(help="Export a team training schedule to a printable calendar.", add_completion=False)

def DateFromStr(strDate: str) -> datetime.date:
	try:
		return arrow.get(strDate, 'YYYY-MM-DD').date()
	except ValueError as exc:
		raise typer.BadParameter(f"{strDate!r} is not a YYYY-MM-DD date") from exc

def LSessionLoad(pathSessions: Path) -> list[SSession]:
	try:
		return CSessionDataBase(pathSessions).lSession
	except (OSError, SessionSourceError) as exc:
		typer.echo(f"error: {exc}", err=True)
		raise typer.Exit(code=1) from exc

def LoggingSetup(fVerbose: bool) -> None:
	logging.basicConfig(
			level=logging.DEBUG if fVerbose else logging.INFO,
			format='%(levelname)s %(name)s: %(message)s')

@app.command()
def export(
		sessions: Path = typer.Argument(..., help="sessions file (.xlsx, .yaml)"),
		start: str = typer.Argument(..., help="first day, YYYY-MM-DD"),
		end: str = typer.Argument(..., help="last day, YYYY-MM-DD"),
		document: str = typer.Option('default', '--document', '-d', help="document name in config.yaml"),
		dest: Optional[Path] = typer.Option(None, '--dest', help="output directory"),
		verbose: bool = typer.Option(False, '--verbose', '-v')) -> None:
	"""Write the calendar document for START..END."""

	LoggingSetup(verbose)

	dateMin = DateFromStr(start)
	dateMax = DateFromStr(end)

	doca = DocaFromStrName(document)
	if dest is not None:
		doca = doca.model_copy(update={'pathDirDest': dest})

	lSession = LSessionLoad(sessions)

	try:
		pathOutput = CScheduleExport(doca).PathExport(lSession, dateMin, dateMax)
	except (InvalidRange, EmitError) as exc:
		typer.echo(f"error: {exc}", err=True)
		raise typer.Exit(code=1) from exc

	print(f"wrote {pathOutput}")

@app.command()
def count(
		sessions: Path = typer.Argument(..., help="sessions file (.xlsx, .yaml)"),
		start: str = typer.Argument(..., help="first day, YYYY-MM-DD"),
		end: str = typer.Argument(..., help="last day, YYYY-MM-DD")) -> None:
	"""Count the sessions between START and END."""

	dateMin = DateFromStr(start)
	dateMax = DateFromStr(end)

	print(CSessionInRange(LSessionLoad(sessions), dateMin, dateMax))

def main():
	app()

if __name__ == '__main__':
	main()
