# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Prints the caller's AWS identity, then reads one document from DocumentDB using
that identity.

    export AWS_ACCESS_KEY_ID=<access_id>
    export AWS_SECRET_ACCESS_KEY=<secret_key>
    export AWS_DEFAULT_REGION=us-west-2
    export DOCDB_URL=<cluster-endpoint>:27017
    docdb-iam-connect
"""
import sys
from typing import Mapping, Optional, TextIO

from docdb_iam.caller_identity import (
    CallerIdentity,
    get_caller_identity,
    print_caller_identity,
)
from docdb_iam.config import AppConfig
from docdb_iam.docdb_connector import connect_and_read
from docdb_iam.exceptions import DocDBDemoError
from docdb_iam.powertools_logger import get_logger
from docdb_iam.user_record import UserRecord

logger = get_logger("app")


def run(
    config: AppConfig, out: TextIO = sys.stdout
) -> tuple[CallerIdentity, UserRecord]:
    identity = get_caller_identity(config)
    print_caller_identity(identity, out)

    record = connect_and_read(config, out)
    return identity, record


def main(environ: Optional[Mapping[str, str]] = None) -> None:
    try:
        config = AppConfig.from_environment(environ)
        run(config)
    except DocDBDemoError as e:
        logger.exception(
            "Fatal error", extra={"errorType": type(e).__name__, "error": str(e)}
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
