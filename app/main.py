## ponto de entrada do FastAPI (app instantiation, middlewares, inclusão de rotas)

# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.db.session import mask_database_url
from app.api import models  # noqa: F401  registra todos os modelos

# Importe seus roteadores (endpoints)
from app.api.endpoints import auth, users, doctors, dashboard, leads, indications, track
from app.api.endpoints import pages, content, quizzes, quiz, outbound, pipeline
from app.api.endpoints import interest_options, cycles
from app.api.endpoints import mobile

logging.basicConfig(level=logging.INFO if settings.ENV == "development" else logging.WARNING)
logger = logging.getLogger("startup")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend do Med1: indicações, leads, páginas e questionários para médicos.",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(doctors.router)
app.include_router(dashboard.router)
app.include_router(leads.router)
app.include_router(leads.public_router)
app.include_router(indications.router)
app.include_router(track.router)
app.include_router(pages.router)
app.include_router(content.router)
app.include_router(quizzes.router)
app.include_router(quiz.router)
app.include_router(outbound.router)
app.include_router(pipeline.router)
app.include_router(interest_options.router)
app.include_router(cycles.router)
app.include_router(mobile.router)


@app.get("/")
def read_root():
    return {"app_name": app.title, "environment": settings.ENV}


@app.on_event("startup")
def startup_log():
    logger.warning("STARTUP DATABASE_URL = %s", mask_database_url(settings.DATABASE_URL))

# Para rodar com uvicorn:
# uvicorn app.main:app --reload
