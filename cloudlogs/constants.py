DEFAULT_CLOUD_URL = "https://cloud.fermyon.com"
DEVELOPER_CLOUD_FAQ = "https://developer.fermyon.com/cloud/faq"

# Channel every `spin deploy` publishes to.
DEPLOY_CHANNEL_NAME = "Spin Deploy"

DEPLOYMENT_ENV_NAME_ENV = "FERMYON_DEPLOYMENT_ENVIRONMENT"
DEFAULT_ENVIRONMENT_FILE = "config"

DEFAULT_TAIL = 10
DEFAULT_INTERVAL = "2"
DEFAULT_SINCE = "7d"
MIN_INTERVAL_SECONDS = 2
MAX_INTERVAL_SECONDS = 24 * 60 * 60

# Seconds per supported duration suffix.
DURATION_UNITS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
}
