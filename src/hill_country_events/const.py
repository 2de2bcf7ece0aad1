"""Constants for the Hill Country events client."""

__version__ = "0.1.0"

DEFAULT_BASE_URL = "http://localhost:5000"
API_PREFIX = "/api"

EVENTS_ENDPOINT = f"{API_PREFIX}/events"
FEATURED_EVENTS_ENDPOINT = f"{API_PREFIX}/events/featured"
UPCOMING_EVENTS_ENDPOINT = f"{API_PREFIX}/events/upcoming"
EVENT_DETAIL_ENDPOINT = f"{API_PREFIX}/events/{{slug}}"
DESTINATION_EVENTS_ENDPOINT = f"{API_PREFIX}/destinations/{{destination_id}}/events"
CALENDAR_EVENTS_ENDPOINT = f"{API_PREFIX}/calendar/events"

DEFAULT_THROTTLE_SECONDS = 0.1
DEFAULT_CACHE_MAX_AGE_SECONDS = 300  # 5 minutes

ENV_API_URL = "HILL_COUNTRY_API_URL"
ENV_REQUEST_INTERVAL = "HILL_COUNTRY_REQUEST_INTERVAL"
ENV_TIMEZONE = "HILL_COUNTRY_TIMEZONE"
ENV_CACHE_MAX_AGE = "HILL_COUNTRY_CACHE_MAX_AGE"
