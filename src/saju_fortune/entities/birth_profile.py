"""Birth profile domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BirthProfileEntity:
    """A validated, normalized fortune request.

    Attributes:
        name: Trimmed, non-empty user name
        birth_date: Calendar date as ``YYYY-MM-DD``
        birth_time: 24-hour time as ``HH:MM``
    """

    name: str
    birth_date: str
    birth_time: str

    @property
    def cache_key(self) -> str:
        """Key under which the generated fortune is cached."""
        return f"{self.name.lower()}|{self.birth_date}|{self.birth_time}"
