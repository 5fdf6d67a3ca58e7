from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SummarizeRequest(BaseModel):
    """Either raw text or a PDF URL to summarize."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "pdfUrl": "https://arxiv.org/pdf/1706.03762v7.pdf",
                "paperTitle": "Attention Is All You Need",
            }
        },
    )

    text: Optional[str] = Field(
        None, alias="textToSummarize", description="Abstract or other raw text", max_length=20000
    )
    pdf_url: Optional[str] = Field(None, alias="pdfUrl", description="Link to the full-text PDF")
    paper_title: Optional[str] = Field(None, alias="paperTitle", description="Display title for the prompt")

    @model_validator(mode="after")
    def _require_source(self):
        has_text = bool(self.text and self.text.strip())
        has_pdf = bool(self.pdf_url and self.pdf_url.strip())
        if not has_text and not has_pdf:
            raise ValueError("Either textToSummarize or pdfUrl is required")
        if has_pdf and not self.pdf_url.startswith(("http://", "https://")):
            raise ValueError("pdfUrl must be an http(s) URL")
        return self


class SummarizeResponse(BaseModel):
    summary: str = Field(..., description="Generated summary text")
