## config do ambiente (variaveis de ambiente)
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # O model_config especifica onde Pydantic deve buscar as variáveis (do .env)
    model_config = SettingsConfigDict(
        env_file='.env',
        case_sensitive=True,
        extra='ignore'
    )

    # ----------------------------------------------------
    # 1. CONFIGURAÇÕES GERAIS DO PROJETO E DO SERVIDOR
    # ----------------------------------------------------
    ENV: str = "development"
    PROJECT_NAME: str = "Med1"

    # ----------------------------------------------------
    # 2. CONFIGURAÇÕES DO BANCO DE DADOS
    # ----------------------------------------------------
    DATABASE_URL: str = "sqlite:///./med1.db"

    # ----------------------------------------------------
    # 3. AUTENTICAÇÃO (web + mobile)
    # ----------------------------------------------------
    JWT_SECRET: str = "seu_jwt_secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    # tokens com mais tempo de vida que isso não são renovados no /refresh
    TOKEN_REFRESH_WINDOW_HOURS: int = 24

    # ----------------------------------------------------
    # 4. LINKS PÚBLICOS
    # ----------------------------------------------------
    NEXT_PUBLIC_APP_URL: str = "http://localhost:3000"
    LANDING_PAGE_URL: str = "https://med1.app"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


# Cria uma instância única da classe Settings para ser importada em toda a aplicação
settings = Settings()
