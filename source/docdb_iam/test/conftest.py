# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from pathlib import Path

import pytest
from docdb_iam.awsapi_cached_client import AWSCachedClient

DATA_DIR = Path(__file__).parent / "data"
PUBLIC_ROOTS_BUNDLE = str(DATA_DIR / "public-roots.pem")
LOCALHOST_CERT = str(DATA_DIR / "localhost.pem")
LOCALHOST_KEY = str(DATA_DIR / "localhost.key")


@pytest.fixture(scope="module", autouse=True)
def aws_credentials():
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(autouse=True)
def clear_client_cache():
    AWSCachedClient.clear_cache()
    yield
    AWSCachedClient.clear_cache()


@pytest.fixture
def docdb_environment():
    return {
        "AWS_ACCESS_KEY_ID": "AKIAEXAMPLE",
        "AWS_SECRET_ACCESS_KEY": "secret-example",
        "AWS_DEFAULT_REGION": "us-west-2",
        "DOCDB_URL": "docdb.cluster-example.us-west-2.docdb.amazonaws.com:27017",
        "DOCDB_CA_BUNDLE": PUBLIC_ROOTS_BUNDLE,
    }
