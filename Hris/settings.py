"""
Django settings for Hris project.
"""

# استخدام مكتبة django-environ لقراءة القيم من .env
import environ
from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent


# تعريف env مع قيم افتراضية
# القيم الحساسة مثل SECRET_KEY, DB_PASSWORD → لا علاقة لها بـ default.
env = environ.Env(
    DEBUG=(bool, False),
    DB_PORT=(int, 5432),
    LOG_LEVEL=(str, "INFO"),
    APPRAISAL_RATING_MIN=(int, 1),
    APPRAISAL_RATING_MAX=(int, 5),
    APPRAISAL_AUTO_POPULATE_KRAS=(bool, True),
)

# تحميل ملف .env
environ.Env.read_env(os.path.join(BASE_DIR, ".env"))

# ========== Debug ==========
DEBUG = env("DEBUG")
SECRET_KEY = env("SECRET_KEY")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["127.0.0.1", "localhost"])

# ========== Database ==========
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": env("DB_NAME"),
        "USER": env("DB_USER"),
        "PASSWORD": env("DB_PASSWORD"),
        "HOST": env("DB_HOST", default="localhost"),
        "PORT": env("DB_PORT"),
    }
}


# -------------------------------------------------
# Applications
#  ملاحظة مهمة: ضع base قبل أي تطبيقات أخرى لأنه يعرّف AUTH_USER_MODEL
# -------------------------------------------------
INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "guardian",                 # Object-level permissions (مثل Odoo access rules)

    # Project apps
    "base.apps.BaseConfig",     # ← يحتوي User/Company (يجب أن يأتي أولاً)
    "hr.apps.HrConfig",
    "performance.apps.PerformanceConfig",
]

# -------------------------------------------------
# Middleware
# -------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# -------------------------------------------------
# URLs / WSGI
# -------------------------------------------------
ROOT_URLCONF = "Hris.urls"

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

WSGI_APPLICATION = "Hris.wsgi.application"


# -------------------------------------------------
# Auth
# -------------------------------------------------
AUTH_USER_MODEL = "base.User"

# Object-level permissions (django-guardian)
# الفائدة: إخبار Django باستخدام Backend الخاص بـ Guardian للتحقق من صلاحيات الكائن الواحد وليس الموديل فقط.
AUTHENTICATION_BACKENDS = (
    "django.contrib.auth.backends.ModelBackend",
    "guardian.backends.ObjectPermissionBackend",
)

# لا حاجة لمستخدم مجهول: نظام الموارد البشرية مغلق على موظفين مسجّلين.
ANONYMOUS_USER_NAME = None

# -------------------------------------------------
# Password validation
# -------------------------------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# -------------------------------------------------
# I18N / TZ
# -------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Baghdad"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -------------------------------------------------
# Logging
# -------------------------------------------------
LOG_LEVEL = env("LOG_LEVEL")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "verbose"},
    },
    "loggers": {
        "performance": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "base": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# -------------------------------------------------
# Appraisal scoring
# -------------------------------------------------
# سلم التقييم المعتمد (ذاتي + مدير)؛ يجب أن يكون واحدًا لأن القيمتين تُحسب بينهما متوسطًا
APPRAISAL_RATING_MIN = env("APPRAISAL_RATING_MIN")
APPRAISAL_RATING_MAX = env("APPRAISAL_RATING_MAX")

# تعبئة لقطات KRA تلقائيًا عند تسجيل مشارك جديد في التقييم
APPRAISAL_AUTO_POPULATE_KRAS = env("APPRAISAL_AUTO_POPULATE_KRAS")
