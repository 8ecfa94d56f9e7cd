# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from docdb_iam.config import AppConfig
from docdb_iam.credentials import build_credential


def test_credential_without_session_token_has_no_mechanism_properties(
    docdb_environment,
):
    # ARRANGE
    config = AppConfig.from_environment(docdb_environment)

    # ACT
    credential = build_credential(config)
    options = credential.to_client_options()

    # ASSERT
    assert credential.mechanism_properties == {}
    assert "authMechanismProperties" not in options
    assert options == {
        "authMechanism": "MONGODB-AWS",
        "authSource": "$external",
        "username": "AKIAEXAMPLE",
        "password": "secret-example",
    }


def test_credential_with_session_token_sets_exactly_that_property(
    docdb_environment,
):
    # ARRANGE
    docdb_environment["AWS_SESSION_TOKEN"] = "tok123"
    config = AppConfig.from_environment(docdb_environment)

    # ACT
    credential = build_credential(config)

    # ASSERT
    assert credential.mechanism_properties == {"AWS_SESSION_TOKEN": "tok123"}
    assert (
        credential.to_client_options()["authMechanismProperties"]
        == "AWS_SESSION_TOKEN:tok123"
    )


def test_credential_repr_does_not_leak_secrets(docdb_environment):
    docdb_environment["AWS_SESSION_TOKEN"] = "tok123"

    credential = build_credential(AppConfig.from_environment(docdb_environment))

    assert "AKIAEXAMPLE" in repr(credential)
    assert "secret-example" not in repr(credential)
    assert "tok123" not in repr(credential)
