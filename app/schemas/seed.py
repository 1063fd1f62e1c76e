"""Seed endpoint schemas."""

from app.schemas.common import CamelModel


class Credential(CamelModel):
    email: str
    password: str


class SeedCredentials(CamelModel):
    admin: Credential
    user: Credential


class SeedCounts(CamelModel):
    users: int
    universities: int
    products: int
    orders: int


class SeedResponse(CamelModel):
    success: bool = True
    message: str
    data: SeedCounts | None = None
    credentials: SeedCredentials
