#!/usr/bin/env python3

from __future__ import annotations  # Forward refs without quotes (eg foo: CFoo, not foo: 'CFoo')

import sys
import yaml

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from .pdf import SColor

g_pathCode = Path(__file__).parent

class SStyle(BaseModel): # tag = style
	"""fill color and tint opacity for one session type."""

	model_config = ConfigDict(frozen=True, populate_by_name=True)

	tuRgb:                  tuple[int, int, int]    = Field(				alias='fill')
	uAlpha:                 float                   = Field(default=0.12,	alias='alpha', ge=0.0, le=1.0)

	@property
	def color(self) -> SColor:
		return SColor(*self.tuRgb)

TMpStrStyle = dict[str, SStyle]

# session type colors, matching the app's schedule view

g_mpStrStyleDefault: TMpStrStyle = {
	'Practice':			SStyle(fill=(245, 158, 11)),
	'Game':				SStyle(fill=(220, 38, 38)),
	'DayOff':			SStyle(fill=(16, 185, 129)),
	'SplitPractice':	SStyle(fill=(249, 115, 22)),
	'Meeting':			SStyle(fill=(59, 130, 246)),
	'Recovery':			SStyle(fill=(245, 158, 11)),
	'Travel':			SStyle(fill=(139, 92, 246)),
	'Default':			SStyle(fill=(71, 85, 105)),
}

def StyleLookup(mpStrStyle: TMpStrStyle, strType: str) -> SStyle:
	return mpStrStyle.get(strType) or mpStrStyle['Default']

class SDocumentArgs(BaseModel): # tag = doca
	"""Schedule export configuration arguments.

	NOTE strLocale is a two letter ISO 639 language code, or one combined with
	a two letter ISO 3166-1 alpha-2 country code (e.g. en_GB/en_US), as parsed
	by babel.Locale.parse(). it drives header dates and weekday names.
	"""

	model_config = ConfigDict(frozen=True, populate_by_name=True)

	strTitle:               str             = Field(default='Team Schedule',		alias='title')
	strPrefix:              str             = Field(default='team-schedule',		alias='artifact_prefix')
	strExt:                 str             = Field(default='pdf',					alias='extension')
	cWeekPerPage:           int             = Field(default=2,						alias='weeks_per_page', ge=1)
	strOrientation:         str             = Field(default='landscape',			alias='orientation')
	fmt:                    str             = Field(default='a4',					alias='format')
	strLocale:              str             = Field(default='en_US',				alias='loc')
	pathDirDest:            Path            = Field(default=Path(),					alias='destination_dir')
	mpStrStyle:             TMpStrStyle     = Field(default=g_mpStrStyleDefault,	alias='styles')
	fPlaceholderUnsupported: bool           = Field(default=False,					alias='unsupported_placeholder')
	strPatUnsupported:      str             = Field(default='[\u0590-\u05FF]',		alias='unsupported_pattern')
	uUnsupportedMin:        float           = Field(default=0.0,					alias='unsupported_fraction', ge=0.0, le=1.0)

	@field_validator('mpStrStyle')
	@classmethod
	def MpStrStyleCheck(cls, mpStrStyle: TMpStrStyle) -> TMpStrStyle:
		if 'Default' not in mpStrStyle:
			raise ValueError("style table needs a 'Default' entry")
		return mpStrStyle

def MpStrDocaLoad(pathYaml: Path) -> dict[str, SDocumentArgs]:
	"""Load all document configurations from a single YAML file."""

	with open(pathYaml, encoding='utf-8') as file:
		mpStrObjYaml = yaml.safe_load(file) or {}

	return { strName: SDocumentArgs(**(objYaml or {})) for strName, objYaml in mpStrObjYaml.items() }

def DocaFromStrName(strName: str, pathYaml: Optional[Path] = None) -> SDocumentArgs:

	mpStrDoca = MpStrDocaLoad(pathYaml or g_pathCode / 'config.yaml')

	try:
		return mpStrDoca[strName]
	except KeyError:
		sys.exit(f"unknown document {strName}")
