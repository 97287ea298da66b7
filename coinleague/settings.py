"""Django settings for the CoinLeague token registry service.


The project covers the server-side slice of the game:
- Price-feed catalog → token registry sync (operator command)
- Full ordered teardown of game data (operator command)
- Symbol resolution and account identity endpoints for the UI


Everything is configured from the environment; defaults target local development.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = os.getenv("DEBUG", "1") in ("1", "true", "True", "yes")
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")
CSRF_TRUSTED_ORIGINS = os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if os.getenv("CSRF_TRUSTED_ORIGINS") else []

def env_int(name, default):
    v = os.getenv(name)
    return int(v) if v not in (None, "") else default

#######################
# Chain used by sync_tokens when --chain is not given (Polygon)
DEFAULT_CHAIN_ID = env_int("DEFAULT_CHAIN_ID", 137)

# Upper bound (seconds) for a single store call. Timeouts are treated as retryable.
STORE_TIMEOUT_SECONDS = env_int("STORE_TIMEOUT_SECONDS", 10)

# How many random "adjective-noun" handles to try before falling back to a numeric suffix
USERNAME_GENERATION_ATTEMPTS = env_int("USERNAME_GENERATION_ATTEMPTS", 10)
#######################


INSTALLED_APPS = [
	"django.contrib.admin",
	"django.contrib.auth",
	"django.contrib.contenttypes",
	"django.contrib.sessions",
	"django.contrib.messages",
	"django.contrib.staticfiles",
	# local apps
	"core",
	"api",
]


MIDDLEWARE = [
	"django.middleware.security.SecurityMiddleware",
	"django.contrib.sessions.middleware.SessionMiddleware",
	"django.middleware.common.CommonMiddleware",
	"django.middleware.csrf.CsrfViewMiddleware",
	"django.contrib.auth.middleware.AuthenticationMiddleware",
	"django.contrib.messages.middleware.MessageMiddleware",
]


ROOT_URLCONF = "coinleague.urls"
TEMPLATES = [
	{
		"BACKEND": "django.template.backends.django.DjangoTemplates",
		"DIRS": [],
		"APP_DIRS": True,
		"OPTIONS": {
			"context_processors": [
				"django.template.context_processors.debug",
				"django.template.context_processors.request",
				"django.contrib.auth.context_processors.auth",
				"django.contrib.messages.context_processors.messages",
			],
		},
	},
]


WSGI_APPLICATION = "coinleague.wsgi.application"


DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")
if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB", "coinleague"),
            "USER": os.getenv("POSTGRES_USER", "coinleague"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", "coinleague"),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
            "OPTIONS": {
                "connect_timeout": STORE_TIMEOUT_SECONDS,
                "options": f"-c statement_timeout={STORE_TIMEOUT_SECONDS * 1000}",
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
            "OPTIONS": {
                "timeout": STORE_TIMEOUT_SECONDS,
            },
        }
    }



AUTH_PASSWORD_VALIDATORS = []


LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True


STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
	},
	"handlers": {
		"console": {"class": "logging.StreamHandler", "formatter": "plain"},
	},
	"root": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
	"loggers": {
		"django.db.backends": {"level": "WARNING"},
	},
}
