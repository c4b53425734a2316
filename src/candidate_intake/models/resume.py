from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from candidate_intake.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .candidate import Candidate


class Resume(Base):
    """
    A CV attached to a candidate.

    Only the stored file's path and MIME type are kept; the upload itself is
    handled outside this package.
    """
    __tablename__ = "resumes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    candidate_id: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    file_type: Mapped[str] = mapped_column(String(50), nullable=False)

    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    candidate: Mapped["Candidate"] = relationship("Candidate", back_populates="resumes")

    def __repr__(self) -> str:
        return f"<Resume(id={self.id!r}, file_type={self.file_type!r}, candidate_id={self.candidate_id!r})>"
