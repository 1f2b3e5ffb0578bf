from pydantic import BaseModel, Field
from typing import List

RESULT_FIELDS = (
    "item_name",
    "calories",
    "score",
    "description",
    "sugar",
    "protein",
    "fat",
    "sustainable_alternatives",
)


class AnalysisResult(BaseModel):
    item_name: str = "Unknown"
    calories: str = "N/A"
    score: str = "N/A"          # 지속가능성 점수 0~5
    description: str = "No description available."
    sugar: str = "N/A"          # g
    protein: str = "N/A"        # g
    fat: str = "N/A"            # g
    sustainable_alternatives: List[str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    jsonFileName: str


class ErrorResponse(BaseModel):
    error: str
