from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from shareit.database import Base


class ItemRequest(Base):
    """Запрос пользователя на вещь, которой пока нет в каталоге."""

    requester_id: Mapped[int] = mapped_column(
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        comment='ID автора запроса',
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index('ix_item_request_requester_id', requester_id),
        {'sqlite_autoincrement': True},
    )
