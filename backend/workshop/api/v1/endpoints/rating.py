from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workshop.database import get_db
from workshop.errors import ValidationError
from workshop.models.submission import Submission
from workshop.schemas.submission import RateEvaluationRequest
from workshop.services.submission_service import find_latest_by_prompt, set_user_rating
from workshop.utils import get_or_404

router = APIRouter()


@router.post("")
async def rate_evaluation(
    request: RateEvaluationRequest,
    db: Session = Depends(get_db)
) -> dict[str, bool | int]:
    """
    Rate an evaluation 1-5.
    With submissionId the rating goes to that submission; otherwise to the
    most recent submission with exactly this prompt text.
    """
    rating = request.rating
    if isinstance(rating, bool) or not isinstance(rating, int) or rating < 1 or rating > 5:
        raise ValidationError("Valid prompt and rating (1-5) are required")

    if request.submissionId is not None:
        submission = get_or_404(db, Submission, request.submissionId, "Submission not found")
    else:
        if not request.prompt or not request.prompt.strip():
            raise ValidationError("Valid prompt and rating (1-5) are required")
        submission = find_latest_by_prompt(db, request.prompt)

    set_user_rating(db, submission, rating)
    return {"success": True, "submissionId": submission.id}
