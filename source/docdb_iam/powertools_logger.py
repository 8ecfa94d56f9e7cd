# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import os
import sys

from aws_lambda_powertools import Logger

SERVICE_PREFIX = "docdb-iam"


def get_logger(service_name: str) -> Logger:
    """
    Returns a structured logger for the given component.

    Records are written to stderr, stdout is reserved for the program's output.
    """
    return Logger(
        service=f"{SERVICE_PREFIX}.{service_name}",
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        logger_handler=logging.StreamHandler(sys.stderr),
    )
