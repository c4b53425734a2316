from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from candidate_intake.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .education import Education
    from .work_experience import WorkExperience
    from .resume import Resume


class Candidate(Base):
    """
    SQLAlchemy model for Candidate.

    A candidate owns any number of education entries, work experiences and
    uploaded resumes; all of them are deleted together with the candidate.
    """
    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # The only unique column of the table; duplicate inserts surface as DuplicateEmailError.
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    phone: Mapped[str | None] = mapped_column(String(15), nullable=True)
    address: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # --- Relationships ---

    educations: Mapped[list["Education"]] = relationship(
        "Education",
        back_populates="candidate",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    work_experiences: Mapped[list["WorkExperience"]] = relationship(
        "WorkExperience",
        back_populates="candidate",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    resumes: Mapped[list["Resume"]] = relationship(
        "Resume",
        back_populates="candidate",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Candidate(id={self.id!r}, email={self.email!r})>"
