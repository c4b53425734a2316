from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import date
from candidate_intake.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .candidate import Candidate


class Education(Base):
    """An education entry of a candidate. A missing end_date means ongoing."""
    __tablename__ = "educations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    candidate_id: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    institution: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(250), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    candidate: Mapped["Candidate"] = relationship("Candidate", back_populates="educations")

    def __repr__(self) -> str:
        return f"<Education(id={self.id!r}, institution={self.institution!r}, candidate_id={self.candidate_id!r})>"
