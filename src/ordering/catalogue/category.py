"""Category aggregate: seasonal collections such as "Summer 2025"."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Integer, String

from ordering.domain import ordering


class Season(Enum):
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"
    SPRING = "spring"


@ordering.aggregate
class Category:
    """A seasonal collection. ``(season, year)`` is unique across categories."""

    season: String(choices=Season, required=True)
    year: Integer(required=True, min_value=2024)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def create(cls, season, year):
        return cls(season=season, year=year, created_at=datetime.now(UTC))

    @property
    def label(self) -> str:
        return f"{self.season.capitalize()} {self.year}"

    def revise(self, season=None, year=None):
        if season is not None:
            self.season = season
        if year is not None:
            self.year = year

    def set_active(self, is_active: bool):
        self.is_active = is_active
