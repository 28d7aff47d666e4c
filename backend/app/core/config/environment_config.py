import os
from dataclasses import dataclass

from dotenv import load_dotenv


# Ensure .env values override any empty defaults from the container environment.
try:
    load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"), override=True)
except Exception:
    # Fallback to default behavior
    load_dotenv(override=True)


@dataclass
class EnvironmentConfig:
    app_env: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Google Places (nearby search, details, text search)
    google_api_key: str = os.getenv("GOOGLE_API_KEY", "")
    google_places_api_base: str = os.getenv("GOOGLE_PLACES_API_BASE", "https://maps.googleapis.com/maps/api/place")
    # Deadline applied to every outbound provider call, in seconds
    places_timeout_seconds: float = float(os.getenv("PLACES_TIMEOUT_SECONDS", "10"))
    # 10 miles in meters
    places_search_radius_meters: int = int(os.getenv("PLACES_SEARCH_RADIUS_METERS", "16093"))
    # Concurrent place-details lookups when enriching shops
    places_details_workers: int = int(os.getenv("PLACES_DETAILS_WORKERS", "5"))
    # Partial directory matching: 'longest' (ranked) or 'first' (iteration order)
    location_match_strategy: str = os.getenv("LOCATION_MATCH_STRATEGY", "longest")
