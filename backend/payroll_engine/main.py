from fastapi import FastAPI
from payroll_engine.routers import payroll
from payroll_engine.database import engine
from payroll_engine.config import LOG_FORMAT, LOG_LEVEL
from payroll_engine import models
import logging

# Ensure application logs show informative messages
logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT
)

models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Payroll Engine API")

app.include_router(payroll.router, prefix="/api/payroll", tags=["payroll"])

@app.get("/")
def read_root():
    return {"message": "Payroll Engine API"}
