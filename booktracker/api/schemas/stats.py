"""Reading statistics schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GenreCount(BaseModel):
    """Genre frequency among finished books."""
    genre: str
    count: int


class DashboardStats(BaseModel):
    """Headline reading statistics."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_books: int
    currently_reading: int
    finished_this_month: int
    finished_this_year: int
    pages_read: int = Field(description="Pages across finished books")
    avg_reading_days: int = Field(description="Mean days from start to finish")
    top_genres: list[GenreCount]


class MonthlyStats(BaseModel):
    """Books and pages finished in one calendar month."""
    month: str = Field(description="Month as YYYY-MM")
    books_finished: int
    pages_read: int


class GenreStats(BaseModel):
    """Genre frequency across all books."""
    genre: str
    book_count: int
