"""
Django base settings for workforce_reports project.
Shared settings between development, production and test.

Reporting engine settings live at the bottom of this file
(idle accountability thresholds, report cache, reason taxonomy).
"""

from pathlib import Path
from decouple import config, Csv

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='django-insecure-change-me-in-production')

# Application definition
DJANGO_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
]

THIRD_PARTY_APPS = [
    'django_filters',
    'django_q',
]

LOCAL_APPS = [
    'apps.accounts',
    'apps.departments',
    'apps.tasks',
    'apps.reports',
    'apps.idle_accountability',
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# =============================================================================
# AUTHENTICATION - Custom User Model
# =============================================================================
# Must be set BEFORE first migration
AUTH_USER_MODEL = 'accounts.User'

# Password hashing - use Argon2 as primary
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.Argon2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher',
]


# =============================================================================
# INTERNATIONALIZATION & TIMEZONE
# =============================================================================
LANGUAGE_CODE = 'en-us'

TIME_ZONE = config('TIME_ZONE', default='Asia/Karachi')

USE_I18N = True

USE_TZ = True


# =============================================================================
# STATIC FILES
# =============================================================================
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# =============================================================================
# CACHE
# =============================================================================
# Local memory cache by default; production overrides with Redis.
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'workforce-reports',
    }
}


# =============================================================================
# DJANGO-Q2 SETTINGS (Background Tasks)
# =============================================================================
Q_CLUSTER = {
    'name': 'workforce_reports',
    'workers': 2,
    'recycle': 500,
    'timeout': 120,
    'compress': True,
    'save_limit': 250,
    'queue_limit': 500,
    'cpu_affinity': 1,
    'label': 'Django Q2',
    'orm': 'default',
}


# =============================================================================
# REPORTING ENGINE
# =============================================================================
# Cached report lifetime (seconds). Fact changes invalidate earlier.
REPORT_CACHE_TIMEOUT = config('REPORT_CACHE_TIMEOUT', default=300, cast=int)

# Idle accountability: an employee-day becomes an item when idle minutes
# exceed the threshold. The pending floor gates the employee-facing queue.
IDLE_THRESHOLD_MINUTES = config('IDLE_THRESHOLD_MINUTES', default=20, cast=int)
IDLE_PENDING_FLOOR_MINUTES = config('IDLE_PENDING_FLOOR_MINUTES', default=20, cast=int)

# Dotted path to a callable(item) -> ticket id, used by the escalation job.
IDLE_TICKET_FACTORY = config('IDLE_TICKET_FACTORY', default='')

# Maximum rows returned by the admin idle listing
IDLE_ADMIN_LIST_LIMIT = 500

IDLE_REASON_CATEGORIES = [
    {
        'key': 'personal',
        'label': 'Personal',
        'subcategories': [
            {'key': 'health', 'label': 'Health related'},
            {'key': 'family', 'label': 'Family emergency'},
            {'key': 'break', 'label': 'Extended break'},
        ],
    },
    {
        'key': 'work_process',
        'label': 'Work / Process',
        'subcategories': [
            {'key': 'waiting_requirements', 'label': 'Waiting for requirements'},
            {'key': 'waiting_approvals', 'label': 'Waiting for approvals'},
            {'key': 'tool_issues', 'label': 'Tool/infra issues'},
        ],
    },
    {
        'key': 'other',
        'label': 'Other',
        'subcategories': [
            {'key': 'misc', 'label': 'Miscellaneous'},
        ],
    },
]


# =============================================================================
# DEFAULT PRIMARY KEY FIELD TYPE
# =============================================================================
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
