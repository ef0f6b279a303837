from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib
from django.test.utils import setup_test_environment


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "skycast.settings")
os.environ.setdefault("TESTING_MODE", "1")
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("GEMINI_MODEL", "test-model")
os.environ.setdefault("GEMINI_BASE_URL", "https://gemini.test/v1beta")
os.environ.setdefault("GEOLOCATION_BACKEND", "none")

django.setup()
setup_test_environment()


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker
