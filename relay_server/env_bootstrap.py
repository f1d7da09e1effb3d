"""
Load environment variables from AWS Secrets Manager before Django settings are loaded.
Call ``load_secrets()`` first in asgi.py so os.environ is populated before
relay_server.settings (and any _env / _env_bool / _env_csv) are evaluated.

Secret name: set RELAY_SECRET_NAME (e.g. "stranger-relay/prod"). When it is unset
nothing is fetched, so local development needs no AWS credentials.
Uses setdefault so existing env vars (e.g. from the task definition) override secret values.
"""
import json
import logging
import os

import boto3

logger = logging.getLogger(__name__)


def load_secrets(secret_name: str | None = None, region: str | None = None) -> int:
    """Copy a JSON secret's keys into os.environ. Returns how many keys were set."""
    secret_name = secret_name or os.environ.get("RELAY_SECRET_NAME")
    if not secret_name:
        return 0
    region = region or os.environ.get("AWS_REGION", "us-east-2")
    client = boto3.client("secretsmanager", region_name=region)
    response = client.get_secret_value(SecretId=secret_name)
    secret_str = response.get("SecretString")
    if not secret_str:
        raise RuntimeError(f"Secret {secret_name!r} has no SecretString")
    data = json.loads(secret_str)
    loaded = 0
    for key, value in data.items():
        if value is not None and key not in os.environ:
            os.environ[key] = str(value)
            loaded += 1
    logger.info("Loaded %d environment values from secret %s", loaded, secret_name)
    return loaded
