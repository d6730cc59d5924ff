#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import copy
import fpdf
import logging

from dataclasses import dataclass
from fpdf.errors import FPDFException
from pathlib import Path
from typing import Optional, Iterable

g_logger = logging.getLogger(__name__)

class EmitError(RuntimeError):
	"""the rendering backend failed to draw or write the document."""

@dataclass(frozen=True)
class SColor: # tag = color
	r: int = 0
	g: int = 0
	b: int = 0

def ColorFromStr(strColor: str) -> SColor:
	r, g, b = fpdf.html.color_as_decimal(strColor).colors255
	return SColor(r, g, b)

def ColorFromGrey(grey: int) -> SColor:
	return SColor(grey, grey, grey)

colorBlack = ColorFromStr('black')
colorWhite = ColorFromStr('white')
colorDimGrey = ColorFromGrey(100)
colorOutside = ColorFromGrey(160)

@dataclass
class SPoint: # tag = pos
	x: float = 0
	y: float = 0

	def Shift(self, dX: float = 0, dY: float = 0) -> None:
		self.x += dX
		self.y += dY

class SRect: # tag = rect
	def __init__(self, x: float = 0, y: float = 0, dX: float = 0, dY: float = 0):
		self.posMin: SPoint = SPoint(x, y)
		self.posMax: SPoint = SPoint(x + dX, y + dY)

	def Copy(self, dX: Optional[float] = None, dY: Optional[float] = None) -> SRect:
		rectNew = copy.deepcopy(self)
		if dX is not None:
			rectNew.dX = dX
		if dY is not None:
			rectNew.dY = dY
		return rectNew

	def __repr__(self):
		return f'{type(self).__name__}(x={self.x!r}, y={self.y!r}, dX={self.dX!r}, dY={self.dY!r})'

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, SRect):
			return NotImplemented
		return self.posMin == other.posMin and self.posMax == other.posMax

	@property
	def x(self) -> float:
		return self.posMin.x

	@property
	def y(self) -> float:
		return self.posMin.y

	@property
	def xMax(self) -> float:
		return self.posMax.x

	@property
	def yMax(self) -> float:
		return self.posMax.y

	@property
	def dX(self) -> float:
		return self.posMax.x - self.posMin.x
	@dX.setter
	def dX(self, dXNew: float) -> None:
		self.posMax.x = self.posMin.x + dXNew

	@property
	def dY(self) -> float:
		return self.posMax.y - self.posMin.y
	@dY.setter
	def dY(self, dYNew: float) -> None:
		self.posMax.y = self.posMin.y + dYNew

	def Shift(self, dX: float = 0, dY: float = 0) -> SRect:
		self.posMin.Shift(dX, dY)
		self.posMax.Shift(dX, dY)
		return self

	def Inset(self, dS: float) -> SRect:
		self.posMin.Shift(dS, dS)
		self.posMax.Shift(-dS, -dS)
		return self

	def Stretch(self, dXLeft: float = 0, dYTop: float = 0, dXRight: float = 0, dYBottom: float = 0) -> SRect:
		self.posMin.Shift(dXLeft, dYTop)
		self.posMax.Shift(dXRight, dYBottom)
		return self

# draw instructions. each one carries everything needed to paint it,
# so a list of them can be replayed onto any backend in order.

@dataclass(frozen=True)
class SDrawRect: # tag = drect
	x: float
	y: float
	dX: float
	dY: float
	color: SColor
	uOpacity: float = 1.0
	fFill: bool = True
	dSLine: float = 0.2

@dataclass(frozen=True)
class SDrawText: # tag = dtext
	x: float
	y: float
	strText: str
	dPtFont: float
	fBold: bool
	color: SColor

@dataclass(frozen=True)
class SAddPage: # tag = dpage
	pass

TInstr = SDrawRect | SDrawText | SAddPage

def DrectFromRect(rect: SRect, color: SColor, uOpacity: float = 1.0, fFill: bool = True, dSLine: float = 0.2) -> SDrawRect:
	return SDrawRect(rect.x, rect.y, rect.dX, rect.dY, color, uOpacity, fFill, dSLine)

class CPdf(fpdf.FPDF):
	"""fpdf2 backed renderer for draw instruction lists. all text uses the built in helvetica."""

	s_mpStrFormatWH: dict[str, tuple[float, float]] ={
		'a2': (1190.55, 1683.78),
		'a3': (841.89, 1190.55),
		'a4': (595.28, 841.89),
		# fpdf.PAGE_FORMATS lists the a5 short side as 420.94pt.
		#	iso a5 is 148mm, which is 419.53pt.
		'a5': (419.53, 595.28),
		'letter': (612.00, 792.00),
		'legal': (612.00, 1008.00),
		'tabloid': (792.00, 1224.00),
	}

	s_strFont = 'helvetica'
	s_uCap = 0.718 # helvetica cap height per em

	def __init__(self, strOrientation: str = 'landscape', fmt: str | tuple[float, float] = 'a4', strUnit: str = 'mm'):
		fpdf.fpdf.PAGE_FORMATS.update(self.s_mpStrFormatWH)

		super().__init__(orientation=strOrientation, unit=strUnit, format=fmt)

		self.strOrientation = strOrientation
		self.fmt = fmt

	def TuDxDyPage(self) -> tuple[float, float]:
		"""page size in user units, without adding a page."""

		tuDxDyPt: tuple[float, float] = fpdf.fpdf.get_page_format(self.fmt, self.k)
		dXPt, dYPt = tuDxDyPt

		# replicating FPDF._set_orientation()

		strOrientation = self.strOrientation.lower()
		if strOrientation in ('p', 'portrait'):
			return (dXPt / self.k, dYPt / self.k)

		assert strOrientation in ('l', 'landscape')
		return (dYPt / self.k, dXPt / self.k)

	def DXStringWidth(self, strText: str, dPtFont: float, fBold: bool = False) -> float:
		self.set_font(self.s_strFont, style='B' if fBold else '', size=dPtFont)
		return self.get_string_width(strText)

	def DYCap(self, dPtFont: float) -> float:
		return dPtFont / self.k * self.s_uCap

	def DrawInstr(self, instr: TInstr) -> None:
		if isinstance(instr, SAddPage):
			self.add_page(orientation=self.strOrientation, format=self.fmt)	# type: ignore[arg-type]
		elif isinstance(instr, SDrawRect):
			if instr.fFill:
				with self.local_context(fill_opacity=instr.uOpacity):
					self.set_fill_color(instr.color.r, instr.color.g, instr.color.b)
					self.rect(instr.x, instr.y, instr.dX, instr.dY, style='F')
			else:
				self.set_line_width(instr.dSLine)
				self.set_draw_color(instr.color.r, instr.color.g, instr.color.b)
				self.rect(instr.x, instr.y, instr.dX, instr.dY, style='D')
		else:
			assert isinstance(instr, SDrawText)
			self.set_font(self.s_strFont, style='B' if instr.fBold else '', size=instr.dPtFont)
			self.set_text_color(instr.color.r, instr.color.g, instr.color.b)
			self.text(instr.x, instr.y, instr.strText)

	def Render(self, iterInstr: Iterable[TInstr]) -> None:
		try:
			for instr in iterInstr:
				self.DrawInstr(instr)
		except FPDFException as exc:
			raise EmitError(f"rendering failed: {exc}") from exc

	def Emit(self, pathOutput: Path) -> Path:
		try:
			pathOutput.parent.mkdir(parents=True, exist_ok=True)
			self.output(str(pathOutput))
		except (FPDFException, OSError) as exc:
			raise EmitError(f"could not write {pathOutput}: {exc}") from exc

		g_logger.info("wrote %d page(s) to %s", self.pages_count, pathOutput)
		return pathOutput
