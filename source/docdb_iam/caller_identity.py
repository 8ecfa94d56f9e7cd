# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Reports which AWS principal the ambient credentials belong to, by calling the
STS GetCallerIdentity API.
"""
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, TextIO

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from docdb_iam.awsapi_cached_client import AWSCachedClient
from docdb_iam.config import AppConfig
from docdb_iam.exceptions import CredentialResolutionError, IdentityServiceError
from docdb_iam.powertools_logger import get_logger

if TYPE_CHECKING:
    from mypy_boto3_sts.client import STSClient
else:
    STSClient = object

logger = get_logger("caller_identity")

ASSUMED_ROLE_RESOURCE = "assumed-role"


@dataclass(frozen=True)
class CallerIdentity:
    arn: str
    account: str = ""
    user_id: str = ""

    @property
    def _resource(self) -> list[str]:
        # arn:partition:sts::account:assumed-role/role/session
        parts = self.arn.split(":", 5)
        if len(parts) != 6 or parts[0] != "arn":
            return []
        return parts[5].split("/")

    @property
    def is_assumed_role(self) -> bool:
        resource = self._resource
        return len(resource) >= 3 and resource[0] == ASSUMED_ROLE_RESOURCE

    @property
    def role_name(self) -> Optional[str]:
        if not self.is_assumed_role:
            return None
        return "/".join(self._resource[1:-1])

    @property
    def session_name(self) -> Optional[str]:
        if not self.is_assumed_role:
            return None
        return self._resource[-1]


def get_caller_identity(
    config: AppConfig, sts: Optional["STSClient"] = None
) -> CallerIdentity:
    """
    Calls GetCallerIdentity with the credentials found by the default provider chain.

    Raises:
        CredentialResolutionError: no usable credentials were found
        IdentityServiceError: the STS call failed or returned no ARN
    """
    if sts is None:
        aws_client = AWSCachedClient(config.region)
        aws_client.get_credentials()
        sts = aws_client.get_connection("sts")

    try:
        response = sts.get_caller_identity()
    except NoCredentialsError as e:
        raise CredentialResolutionError(str(e)) from e
    except (ClientError, BotoCoreError) as e:
        raise IdentityServiceError(f"GetCallerIdentity failed: {e}") from e

    arn = response.get("Arn")
    if not arn:
        raise IdentityServiceError("GetCallerIdentity response did not contain an Arn")

    identity = CallerIdentity(
        arn=arn,
        account=response.get("Account", ""),
        user_id=response.get("UserId", ""),
    )
    logger.debug(
        "Resolved caller identity",
        extra={"account": identity.account, "assumedRole": identity.is_assumed_role},
    )
    return identity


def print_caller_identity(identity: CallerIdentity, out: TextIO = sys.stdout) -> None:
    print("== AWS caller identity", file=out)
    print("ARN: ", identity.arn, file=out)
