from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    RENTAL_ATLAS_DB_URL: str = "sqlite+aiosqlite:///./rental_atlas.db"

    # --- Minimal admin auth (API key) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Geocoding (Mapbox). No token => geocoding silently unavailable ---
    MAPBOX_TOKEN: str | None = None
    MAPBOX_BASE_URL: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    GEOCODE_TIMEOUT_S: float = 10.0
    GEOCODE_DELAY_S: float = 0.2  # pause after every geocode call

    # --- Refresh-all (grouped concurrency) ---
    REFRESH_BATCH_SIZE: int = 10
    REFRESH_BATCH_DELAY_S: float = 0.2

    # --- Scrape sources ---
    SCRAPE_FEED_URL: str = "https://chico.craigslist.org/search/apa?format=rss"
    SCRAPE_USER_AGENT: str = "RentalAtlasBot/1.0 (Butte County rental research; +contact: admin@example.com)"
    SCRAPE_HTTP_TIMEOUT_S: float = 30.0
    SCRAPE_SOURCE_DELAY_S: float = 1.0
    SCRAPE_MAX_LISTINGS_PER_SOURCE: int = 50

    # --- Batch accounting ---
    ERROR_MESSAGE_MAX_LEN: int = 80

    # Spread pins that share a fallback centroid. Display only.
    FALLBACK_JITTER_ENABLED: bool = True


settings = Settings()
