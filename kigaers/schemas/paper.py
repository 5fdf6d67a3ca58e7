from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

END_OF_FEED_CARD_ID = "___END_OF_FEED___"


class Paper(BaseModel):
    """One search result as sent to the frontend and stored in the library.

    Attribute names are snake_case; the JSON shape uses the camelCase aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="arXiv identifier without version suffix")
    title: str
    abstract: str = Field("", alias="summary", description="Original abstract text")
    authors: List[str] = Field(default_factory=list)
    published: str = ""
    updated: str = ""
    pdf_link: str = Field("", alias="pdfLink")
    categories: List[str] = Field(default_factory=list)
    ai_summary: Optional[str] = Field(None, alias="aiSummary")
    is_end_of_feed: bool = Field(False, alias="isEndOfFeedCard")
    end_of_feed_message: Optional[str] = Field(None, alias="endOfFeedMessage")

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def end_of_feed_message(term: str) -> str:
    term = term.strip()
    if term:
        return f'All results for "{term}" have been shown.'
    return "You have seen every paper."


def make_end_of_feed_card(term: str = "") -> Paper:
    """Build the synthetic placeholder that closes a result set."""
    message = end_of_feed_message(term)
    return Paper(
        id=END_OF_FEED_CARD_ID,
        title="Notice",
        abstract=message,
        is_end_of_feed=True,
        end_of_feed_message=message,
    )
