"""Preference Schemas — tone preference read/write."""

from pydantic import BaseModel


class TonePreference(BaseModel):
    tone: str
