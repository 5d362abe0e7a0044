"""Schemas comuns: base camelCase, ids e envelope de resposta"""
from typing import Annotated, Any, Optional
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

ObjectId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=24, max_length=24)]
PersonName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=50, pattern=r"^[a-zA-Z ]*$"),
]
Country = Annotated[str, StringConstraints(strip_whitespace=True, min_length=4, max_length=56)]


class CamelModel(BaseModel):
    """Base com aliases camelCase na API e snake_case no Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Pagination(CamelModel):
    """Parâmetros de paginação"""
    skip: int = Field(0, ge=0, le=1_000_000)
    limit: int = Field(10, ge=1, le=1000)


class NameResponse(CamelModel):
    first_name: str
    last_name: str


def envelope(message: str, data: Optional[Any] = None, status_code: int = 200) -> dict:
    """Envelope padrão de sucesso {statusCode, message, data?}"""
    body = {"statusCode": status_code, "message": message}
    if data is not None:
        body["data"] = data
    return body
