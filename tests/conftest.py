"""Shared test fixtures."""
import os
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def aws_env():
    """Point boto3 at fake credentials so no test can reach real AWS."""
    env_vars = {
        'AWS_ACCESS_KEY_ID': 'testing',
        'AWS_SECRET_ACCESS_KEY': 'testing',
        'AWS_SECURITY_TOKEN': 'testing',
        'AWS_SESSION_TOKEN': 'testing',
        'AWS_DEFAULT_REGION': 'us-east-1'
    }
    with patch.dict(os.environ, env_vars):
        yield env_vars


@pytest.fixture
def sample_alert():
    """One alert object as returned by the SOTA API."""
    return {
        'id': 12345,
        'userID': 678,
        'timeStamp': '2024-06-01T08:00:00Z',
        'dateActivated': '2024-06-01T10:00:00Z',
        'associationCode': 'W7O',
        'summitCode': 'CN-001',
        'summitDetails': 'Mount Hood, 3429m, 10 Points',
        'frequency': '14.285',
        'comments': None,
        'activatingCallsign': 'K1ABC',
        'activatorName': 'Alex',
        'posterCallsign': 'K1ABC',
        'epoch': 'abc123'
    }
