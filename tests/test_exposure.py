"""Tests for the environment -> invoker policy mapping."""

import pytest

from notes_service.config import Environment
from notes_service.errors import ConfigurationError
from notes_service.infra.exposure import (
    INVOKER_ROLE,
    ExposureKind,
    exposure_policy,
    scanner_member,
)


@pytest.mark.parametrize(
    "environment, kind, member",
    [
        (Environment.DEVELOPMENT, ExposureKind.PRIVATE, None),
        (
            Environment.STAGING,
            ExposureKind.SCANNER_ONLY,
            "serviceAccount:gitlab-dast-sa@notes-proj.iam.gserviceaccount.com",
        ),
        (Environment.PRODUCTION, ExposureKind.PUBLIC, "allUsers"),
    ],
)
def test_exposure_table(environment, kind, member):
    policy = exposure_policy(environment, "notes-proj")

    assert policy.kind is kind
    assert policy.member == member
    assert policy.grants_invocation is (member is not None)
    assert policy.role == INVOKER_ROLE


def test_accepts_raw_environment_names():
    assert exposure_policy("Production", "p").kind is ExposureKind.PUBLIC
    assert exposure_policy(" development ", "p").kind is ExposureKind.PRIVATE


def test_unknown_environment_is_rejected():
    with pytest.raises(ConfigurationError, match="Unknown environment 'qa'"):
        exposure_policy("qa", "p")


def test_custom_scanner_account():
    policy = exposure_policy(Environment.STAGING, "p", scanner_account_id="zap-scanner")

    assert policy.member == scanner_member("p", "zap-scanner")
    assert policy.member == "serviceAccount:zap-scanner@p.iam.gserviceaccount.com"
