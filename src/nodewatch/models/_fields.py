"""Lenient field types shared by the device models."""

from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator, Field


def _none_to_zero(value: object) -> object:
    return 0 if value is None else value


# Device counters are reported as JSON numbers; a missing or null counter reads as 0.
Counter = Annotated[int, BeforeValidator(_none_to_zero), Field(ge=0)]
