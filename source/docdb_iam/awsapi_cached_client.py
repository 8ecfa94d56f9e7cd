# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.credentials import Credentials
from botocore.exceptions import BotoCoreError

from docdb_iam.exceptions import CredentialResolutionError

BOTO_CONFIG = Config(retries={"mode": "standard", "max_attempts": 10})


class AWSCachedClient:
    """
    Maintains a single boto3 client per service and region for the life of the
    process. Credentials come from the boto3 default resolution chain
    (environment variables first, then shared config, then instance roles).
    """

    _clients: dict[tuple[str, Optional[str]], Any] = {}

    def __init__(self, region: Optional[str] = None):
        self.region = region
        self.session = boto3.session.Session(region_name=region)

    def get_credentials(self) -> Credentials:
        try:
            credentials = self.session.get_credentials()
        except BotoCoreError as e:
            raise CredentialResolutionError(
                f"Unable to resolve AWS credentials: {e}"
            ) from e

        if credentials is None:
            raise CredentialResolutionError(
                "Unable to locate AWS credentials in the default provider chain"
            )
        return credentials

    def get_connection(self, service: str, region: Optional[str] = None) -> Any:
        region = region or self.region
        key = (service, region)
        if key not in self._clients:
            self._clients[key] = self.session.client(
                service, region_name=region, config=BOTO_CONFIG
            )
        return self._clients[key]

    @classmethod
    def clear_cache(cls) -> None:
        """Drops cached clients so each test gets a fresh mock-backed client."""
        cls._clients.clear()
