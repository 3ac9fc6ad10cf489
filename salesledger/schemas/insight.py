from pydantic import BaseModel


class InsightResponse(BaseModel):
    insights: str
