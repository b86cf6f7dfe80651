from workshop.models.session import WorkshopSession
from workshop.models.submission import Submission
from workshop.models.feedback import SessionFeedback
from workshop.models.setting import Setting

__all__ = ["WorkshopSession", "Submission", "SessionFeedback", "Setting"]
