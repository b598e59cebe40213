from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    ADMIN_SECRET: str
    APP_NAME: str = "Last Man Standing"

    # Third-party football data API (standings, fixtures)
    FOOTBALL_API_URL: str = "https://api.football-data.org/v4"
    FOOTBALL_API_KEY: str = ""
    FOOTBALL_COMPETITION: str = "PL"

    # Payment provider checkout sessions (premium upgrades)
    PAYMENT_API_URL: str = "https://api.stripe.com/v1"
    PAYMENT_API_KEY: str = ""

    MAX_LEAGUES_PER_USER: int = 10
    MAX_TEAM_USES: int = 2

    # Rate limiter policies, requests per fixed window
    ADMIN_SYNC_MAX_REQUESTS: int = 3
    ADMIN_SYNC_WINDOW_MS: int = 5 * 60 * 1000
    LEAGUE_CREATE_MAX_REQUESTS: int = 5
    LEAGUE_CREATE_WINDOW_MS: int = 10 * 60 * 1000
    LEAGUE_JOIN_MAX_REQUESTS: int = 10
    LEAGUE_JOIN_WINDOW_MS: int = 60 * 1000
    AUTH_MAX_REQUESTS: int = 5
    AUTH_WINDOW_MS: int = 15 * 60 * 1000
    AUTH_BLOCK_MS: int = 60 * 60 * 1000

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
