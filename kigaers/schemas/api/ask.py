from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AskRequest(BaseModel):
    """Request model for a question about one paper's PDF."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "question": "Which datasets were used for evaluation?",
                "pdfUrl": "https://arxiv.org/pdf/1706.03762v7.pdf",
                "paperTitle": "Attention Is All You Need",
            }
        },
    )

    question: str = Field(..., description="User's question", min_length=1, max_length=2000)
    pdf_url: str = Field(..., alias="pdfUrl", description="Link to the paper's PDF", min_length=1)
    paper_title: Optional[str] = Field(None, alias="paperTitle")

    @field_validator("question")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be blank")
        return value.strip()

    @field_validator("pdf_url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("pdfUrl must be an http(s) URL")
        return value


class AskResponse(BaseModel):
    answer: str = Field(..., description="Generated answer grounded in the PDF")
