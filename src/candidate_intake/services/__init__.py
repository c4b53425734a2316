from .candidate_service import add_candidate

__all__ = ["add_candidate"]
