import os
import sys
import warnings
from pathlib import Path

# Ignore warnings from app.shared
warnings.filterwarnings("ignore", category=DeprecationWarning, module="app.shared.*")

# Keep tests away from real credentials and the developer ledger
os.environ.update(
    {
        "AWS_ACCESS_KEY_ID": "test-key",
        "AWS_SECRET_ACCESS_KEY": "test-secret",
        "AWS_REGION": "eu-west-1",
        "S3_ASSET_BUCKET": "test-assets",
        "S3_ASSET_PREFIX": "",
        "MEDIALIVE_ROLE_ARN": "arn:aws:iam::123456789012:role/MediaLiveAccessRole",
        "DESCRIBE_MAX_ATTEMPTS": "5",
        "DESCRIBE_RETRY_DELAY_MS": "0",
        "LOGFIRE_ENABLE": "false",
    }
)

# Ensure `app` directory is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
APP_DIR = PROJECT_ROOT / "app"
app_dir_str = str(APP_DIR)
if app_dir_str not in sys.path:
    sys.path.insert(0, app_dir_str)

# Import shared fixtures so they are available to all tests
from tests.fixtures.aws_fixtures import *  # noqa: E402, F403
