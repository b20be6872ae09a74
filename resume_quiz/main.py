from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_quiz.config import get_settings
from resume_quiz.database import init_db
from resume_quiz.routers import score, leaderboard

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Resume Quiz Leaderboard",
    description="Best-score leaderboard for the resume interview quiz",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(score.router)
app.include_router(leaderboard.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
