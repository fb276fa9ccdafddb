"""Environment-driven configuration.

Values are read at call time rather than import time so a warm serverless
instance picks up redeployed settings and tests can override them.
"""

import os
from typing import Optional
from pydantic import BaseModel

from src.utils.errors import IntegrationError, SupabaseError


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an environment variable, treating blank values as unset."""
    value = os.environ.get(name, "").strip()
    return value or default


def is_development() -> bool:
    """Check if running in development mode."""
    env = (get_env("NODE_ENV") or get_env("ENVIRONMENT") or "").lower()
    return env in ("development", "local")


class SupabaseSettings(BaseModel):
    url: str
    service_role_key: str


class SesSettings(BaseModel):
    access_key_id: str
    secret_access_key: str
    region: str
    from_email: str
    contact_email: str
    admin_email: str


class JiraSettings(BaseModel):
    base_url: str
    email: str
    api_token: str
    project_key: str


def get_supabase_settings() -> SupabaseSettings:
    url = get_env("SUPABASE_URL")
    key = get_env("SUPABASE_SERVICE_ROLE_KEY")
    if not url or not key:
        raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return SupabaseSettings(url=url, service_role_key=key)


def get_ses_settings() -> SesSettings:
    """SES credentials and addresses; raises when credentials are incomplete."""
    access_key_id = get_env("AWS_ACCESS_KEY_ID")
    secret_access_key = get_env("AWS_SECRET_ACCESS_KEY")
    from_email = get_env("AWS_SES_FROM_EMAIL")
    if not access_key_id or not secret_access_key or not from_email:
        raise IntegrationError("AWS SES credentials are not properly configured")

    contact_email = get_env("CONTACT_EMAIL", "hello@verbalytics.ai")
    return SesSettings(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        region=get_env("AWS_REGION", "eu-west-1"),
        from_email=from_email,
        contact_email=contact_email,
        admin_email=get_env("ADMIN_EMAIL", contact_email),
    )


def get_jira_settings() -> JiraSettings:
    base_url = get_env("JIRA_BASE_URL")
    email = get_env("JIRA_EMAIL")
    api_token = get_env("JIRA_API_TOKEN")
    project_key = get_env("JIRA_PROJECT_KEY")
    if not base_url or not email or not api_token or not project_key:
        raise IntegrationError("JIRA configuration is missing. Please check environment variables.")
    return JiraSettings(
        base_url=base_url.rstrip("/"),
        email=email,
        api_token=api_token,
        project_key=project_key,
    )


def get_recaptcha_secret() -> Optional[str]:
    return get_env("RECAPTCHA_SECRET_KEY")


def get_recaptcha_min_score() -> float:
    return float(get_env("RECAPTCHA_MIN_SCORE", "0.5"))


def get_app_url() -> Optional[str]:
    """Public base URL used for auth redirects, when set."""
    return get_env("APP_URL")
