from __future__ import annotations

import datetime as dt

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import Mapped, mapped_column  # type: ignore[import-not-found]

from roopsnap.auth.models import Base


class Photo(Base):
    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    original_name: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    file_path: Mapped[str] = mapped_column(sa.Text(), nullable=False)
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    category: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    uploaded_at: Mapped[dt.datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
    )
