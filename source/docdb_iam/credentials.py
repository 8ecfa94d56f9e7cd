# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Any

from docdb_iam.config import AppConfig

MONGODB_AWS_MECHANISM = "MONGODB-AWS"
EXTERNAL_AUTH_SOURCE = "$external"
SESSION_TOKEN_PROPERTY = "AWS_SESSION_TOKEN"


@dataclass(frozen=True)
class MongoAWSCredential:
    """IAM credential for the MONGODB-AWS authentication mechanism."""

    username: str
    password: str = field(repr=False)
    mechanism: str = MONGODB_AWS_MECHANISM
    source: str = EXTERNAL_AUTH_SOURCE
    mechanism_properties: dict[str, str] = field(default_factory=dict, repr=False)

    def to_client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "authMechanism": self.mechanism,
            "authSource": self.source,
            "username": self.username,
            "password": self.password,
        }
        if self.mechanism_properties:
            options["authMechanismProperties"] = ",".join(
                f"{key}:{value}" for key, value in self.mechanism_properties.items()
            )
        return options


def build_credential(config: AppConfig) -> MongoAWSCredential:
    mechanism_properties = {}
    if config.session_token:
        mechanism_properties[SESSION_TOKEN_PROPERTY] = config.session_token

    return MongoAWSCredential(
        username=config.access_key_id,
        password=config.secret_access_key,
        mechanism_properties=mechanism_properties,
    )
