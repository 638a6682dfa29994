import os

class Settings:
    # Target site
    BASE_URL: str = os.getenv("PKGGODEV_BASE_URL", "https://pkg.go.dev")

    # Scraping
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    USER_AGENT: str = os.getenv("USER_AGENT", "pkggodev/1.0 (+https://pkg.go.dev)")
    # "httpx" or "requests"
    HTTP_BACKEND: str = os.getenv("HTTP_BACKEND", "httpx").lower()

    # Relative dates ("3 days ago", "today") are resolved against this zone
    TIMEZONE: str = os.getenv("TIMEZONE", "UTC")

    # Search
    SEARCH_LIMIT: int = int(os.getenv("SEARCH_LIMIT", "25"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

settings = Settings()
