from pathlib import Path

from pydantic import BaseModel

from app.shared.config import config

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _opt(key: str) -> str | None:
    return (config.get(key) or "").strip() or None


class AppEnvironConfig(BaseModel):
    # Region shown on the dashboard when the request does not pick one
    AWS_REGION: str | None = _opt("AWS_REGION")

    # AWS credentials
    AWS_ACCESS_KEY_ID: str | None = _opt("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY: str | None = _opt("AWS_SECRET_ACCESS_KEY")

    # MP4 assets used by file-backed inputs
    S3_ASSET_BUCKET: str | None = _opt("S3_ASSET_BUCKET")
    S3_ASSET_PREFIX: str = (config.get("S3_ASSET_PREFIX") or "").strip()

    # Role assumed by MediaLive channels
    MEDIALIVE_ROLE_ARN: str | None = _opt("MEDIALIVE_ROLE_ARN")

    # Channel templates per redundancy tier
    CHANNEL_TEMPLATE_STANDARD: str = _opt("CHANNEL_TEMPLATE_STANDARD") or str(
        TEMPLATES_DIR / "standard_pipeline_template.json"
    )
    CHANNEL_TEMPLATE_SINGLE: str = _opt("CHANNEL_TEMPLATE_SINGLE") or str(
        TEMPLATES_DIR / "single_pipeline_template.json"
    )

    # Local event ledger
    EVENTS_LEDGER_PATH: str = _opt("EVENTS_LEDGER_PATH") or "data/events.json"

    # Readiness polling of freshly created channels
    DESCRIBE_MAX_ATTEMPTS: int = config.get_int("DESCRIBE_MAX_ATTEMPTS", 5)
    DESCRIBE_RETRY_DELAY_MS: int = config.get_int("DESCRIBE_RETRY_DELAY_MS", 2000, minimum=0)

    # Tag stamped on every input this tool creates
    RESOURCE_TAG_CREATED_BY: str = _opt("RESOURCE_TAG_CREATED_BY") or "live-event-panel"


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
