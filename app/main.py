import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import CORS_ORIGINS, LOG_LEVEL, validate_config
from .database import create_db_and_tables
from .routers import upload

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Vehicle intake service is running"}

app.include_router(upload.router)

@app.on_event("startup")
def on_startup():
    validate_config()
    create_db_and_tables()
