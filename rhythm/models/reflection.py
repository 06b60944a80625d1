"""
Daily reflection fields, cleared on every day rollover.
"""

from pydantic import BaseModel


class Reflections(BaseModel):
    mattered: str = ""
    released: str = ""
    wait: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.mattered or self.released or self.wait)
