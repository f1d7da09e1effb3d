"""
Tests for loading environment values from AWS Secrets Manager.
"""

import json
import os
from unittest.mock import MagicMock, patch

import pytest

from relay_server.env_bootstrap import load_secrets


def _secrets_client(payload):
    client = MagicMock()
    client.get_secret_value.return_value = payload
    return client


def test_noop_without_secret_name(monkeypatch):
    monkeypatch.delenv("RELAY_SECRET_NAME", raising=False)

    with patch("relay_server.env_bootstrap.boto3.client") as client:
        assert load_secrets() == 0

    client.assert_not_called()


def test_existing_env_wins():
    secret = {"DJANGO_ALLOWED_HOSTS": "from-secret.example.com", "INSTANCE_ID": "relay-7", "UNUSED": None}
    secrets = _secrets_client({"SecretString": json.dumps(secret)})

    with patch.dict(os.environ, {"RELAY_SECRET_NAME": "stranger-relay/test", "DJANGO_ALLOWED_HOSTS": "from-env"}):
        os.environ.pop("INSTANCE_ID", None)
        with patch("relay_server.env_bootstrap.boto3.client", return_value=secrets) as client:
            loaded = load_secrets(region="eu-west-1")

        assert loaded == 1
        assert os.environ["DJANGO_ALLOWED_HOSTS"] == "from-env"
        assert os.environ["INSTANCE_ID"] == "relay-7"
        assert "UNUSED" not in os.environ

    client.assert_called_once_with("secretsmanager", region_name="eu-west-1")
    secrets.get_secret_value.assert_called_once_with(SecretId="stranger-relay/test")


def test_empty_secret_raises():
    with patch("relay_server.env_bootstrap.boto3.client", return_value=_secrets_client({})):
        with pytest.raises(RuntimeError, match="no SecretString"):
            load_secrets(secret_name="stranger-relay/empty")
