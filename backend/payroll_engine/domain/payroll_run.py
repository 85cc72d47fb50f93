from pydantic import BaseModel, Field
from typing import List


class PayrollRunItem(BaseModel):
    employee_code: str
    name: str
    net_salary: float


class PayrollRunResult(BaseModel):
    message: str
    month: int
    year: int
    processed: int
    results: List[PayrollRunItem] = Field(default_factory=list)
