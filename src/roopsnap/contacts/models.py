from __future__ import annotations

import datetime as dt

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from roopsnap.auth.models import Base


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    email: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    message: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    phone: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    submitted_at: Mapped[dt.datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        sa.Text(), nullable=False, server_default=sa.text("'new'")
    )
