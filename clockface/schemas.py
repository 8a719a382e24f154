"""Pydantic response models for the JSON API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class APIModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TimeResponse(APIModel):
    time: str


class DateResponse(APIModel):
    date: str


class DifferenceResponse(APIModel):
    difference: str
