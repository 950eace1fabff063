from fastapi import APIRouter, HTTPException

from prose_review.models.pydantic import ReviewRequest, ReviewResponse
from prose_review.services.review_service import ReviewService

router = APIRouter()
review_service = ReviewService()

# einfacher Health-Check
@router.get("/health")
async def health():
    return {"status": "ok"}


# nimmt eine Anfrage entgegen und startet die Review
@router.post("/review", response_model=ReviewResponse)
async def review(req: ReviewRequest):
    try:
        return await review_service.review(req)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
