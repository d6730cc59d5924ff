"""Shared fixtures for the schedule export tests.

Layout tests measure text with a fixed one-unit-per-character width so the
expected truncation and line counts can be worked out by hand.
"""

import datetime

import pytest

from tsp.config import g_mpStrStyleDefault
from tsp.database import SSession
from tsp.layout import CBoxLayoutEngine, CScriptPolicy
from tsp.loc import CFormatter


def DXMeasureFixed(strText: str, dPtFont: float, fBold: bool) -> float:
    return float(len(strText))


@pytest.fixture
def fmtr() -> CFormatter:
    return CFormatter('en_US')


@pytest.fixture
def boxle(fmtr) -> CBoxLayoutEngine:
    return CBoxLayoutEngine(DXMeasureFixed, g_mpStrStyleDefault, fmtr.StrTime, fmtr.StrTypeLabel)


@pytest.fixture
def boxle_placeholder(fmtr) -> CBoxLayoutEngine:
    return CBoxLayoutEngine(
        DXMeasureFixed,
        g_mpStrStyleDefault,
        fmtr.StrTime,
        fmtr.StrTypeLabel,
        CScriptPolicy(fPlaceholder=True),
    )


def Session(id: str, strDate: str, strType: str = 'Practice', **kwargs) -> SSession:
    return SSession(id=id, strDate=strDate, strType=strType, **kwargs)


@pytest.fixture
def june3() -> datetime.date:
    # a monday
    return datetime.date(2024, 6, 3)
