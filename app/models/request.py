from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.services.normalizer import is_http_url


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str

    @field_validator("url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not is_http_url(value):
            raise ValueError("Invalid or missing URL: an absolute http(s) URL is required.")
        return value
