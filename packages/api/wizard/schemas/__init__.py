# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel


class StageRef(BaseModel):
    """Request body naming a target stage."""

    stage: str
