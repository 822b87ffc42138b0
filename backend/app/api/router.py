from fastapi import APIRouter

from app.api.routes.lemmatize import router as lemmatize_router
from app.api.routes.root import router as root_router
from app.api.routes.vocab import router as vocab_router

api_router = APIRouter()
api_router.include_router(root_router)
api_router.include_router(lemmatize_router)
api_router.include_router(vocab_router)
