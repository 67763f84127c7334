"""Pydantic schemas for numbering endpoints."""
from enum import Enum

from pydantic import BaseModel, Field


class NumberSeries(str, Enum):
    """Numbering series."""

    nis = "nis"
    card = "card"


class GeneratedNumberResponse(BaseModel):
    """A freshly reserved identifier."""

    series: NumberSeries
    value: str = Field(..., description="Nomor yang dihasilkan")
