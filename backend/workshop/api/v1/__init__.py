# API v1
from fastapi import APIRouter
from workshop.api.v1.endpoints import evaluate, sessions, submissions, rating, feedback, goal, analytics, health, admin

api_router = APIRouter()
api_router.include_router(evaluate.router, prefix="/evaluate", tags=["evaluate"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
api_router.include_router(rating.router, prefix="/rate-evaluation", tags=["submissions"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["feedback"])
api_router.include_router(goal.router, prefix="/goal", tags=["goal"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
