"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    The table itself is created by the SQL migrations; this model only maps
    it. Status is stored as its plain string value.
    """

    __tablename__ = "books"

    id: str = Field(primary_key=True)
    title: str
    author: str
    genre: str | None = None
    published_year: int | None = None
    status: str
