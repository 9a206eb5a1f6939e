from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Credentials(_CamelModel):
    email: EmailStr
    password: str


class SignUpRequest(Credentials):
    redirect_to: str | None = None


class ResetPasswordRequest(_CamelModel):
    email: EmailStr
    redirect_to: str | None = None


class UpdatePasswordRequest(_CamelModel):
    password: str
    reset_token: str | None = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class CurrentUserRead(_CamelModel):
    id: str
    email: str
