"""
Agent - licensed broker/salesperson who owns listings.
=======================================================

Only the public projection (id, name, photo) is read by the search core.
The remaining columns are maintained by the agent CRUD layer.
"""
from typing import Optional, TYPE_CHECKING, List
from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .property import Property


class Agent(Base, TimestampMixin):
    """Real-estate agent."""

    __tablename__ = "agents"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    photo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    prc_license: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    properties: Mapped[List["Property"]] = relationship(back_populates="agent")

    def __repr__(self) -> str:
        return f"<Agent(id={self.id}, name='{self.name}')>"
