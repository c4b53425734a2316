from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import date
from candidate_intake.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .candidate import Candidate


class WorkExperience(Base):
    __tablename__ = "work_experiences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    candidate_id: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    company: Mapped[str] = mapped_column(String(100), nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    candidate: Mapped["Candidate"] = relationship("Candidate", back_populates="work_experiences")

    def __repr__(self) -> str:
        return f"<WorkExperience(id={self.id!r}, company={self.company!r}, candidate_id={self.candidate_id!r})>"
