"""Category model shared by all imported transactions."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cashflow.models.base import BaseModel

CATEGORY_TITLE_MAX_LENGTH = 100


class Category(BaseModel):
    """Category looked up by its title.

    Titles are the business key: imports resolve category names against this
    column, so it carries a unique constraint to arbitrate concurrent creates.
    Transactions reference categories; a category never owns them.
    """

    __tablename__ = "categories"

    title: Mapped[str] = mapped_column(String(CATEGORY_TITLE_MAX_LENGTH), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, title={self.title!r})>"
