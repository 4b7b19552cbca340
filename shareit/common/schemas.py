from pydantic import BaseModel, ConfigDict


class CustomErrorResponse(BaseModel):
    """Схема для пользовательских ошибок."""

    code: int
    error: str
    message: str

    model_config = ConfigDict(from_attributes=True)
