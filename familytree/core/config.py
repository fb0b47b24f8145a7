from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    APP_NAME: str = "FamilyTreeLayout"
    APP_ENV: str = "dev"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "info"

    APP_CORS_ORIGINS: str = "http://localhost:3000"
    @property
    def CORS_ORIGINS(self) -> List[str]:
        return [o.strip() for o in self.APP_CORS_ORIGINS.split(",") if o.strip()]

    # JWT
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    # Shared family password (passlib hash)
    ACCESS_PASSWORD_HASH: str

    # Record store
    STORE_BACKEND: Literal["neo4j", "json"] = "neo4j"
    DATA_FILE: str = "data/sample.json"

    # Neo4j
    NEO4J_URI: str = "bolt://localhost:7687"
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = ""

    # Layout
    LAYOUT_LEVEL_GAP: float = 220.0
    LAYOUT_PARTNER_GAP: float = 150.0
    LAYOUT_CARD_WIDTH: float = 140.0
    LAYOUT_CARD_HEIGHT: float = 150.0
    LAYOUT_BLOCK_MARGIN: float = 40.0
    LAYOUT_GUIDE_MARGIN: float = 200.0
    LAYOUT_ANCHOR_COLLAPSED_COUPLES: bool = False

settings = Settings()
