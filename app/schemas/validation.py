from pydantic import BaseModel


class ValidationErrorDetail(BaseModel):
    """Body of a 422 response"""
    message: str = "Validation error"
    errors: dict[str, list[str]]  # field -> messages, in rule order


class ValidationErrorResponse(BaseModel):
    detail: ValidationErrorDetail
