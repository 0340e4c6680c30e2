import logging

from fastapi import FastAPI

from api.routers import nlp, ops

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="tasknotes-nlp")

app.include_router(nlp.router)
app.include_router(ops.router)
