from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shareit.config import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from shareit.database import Base


class User(Base):
    """Модель для пользователей."""

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        unique=True,
        nullable=False,
    )
