# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class DocDBDemoError(Exception):
    """Base class for every failure that terminates the program."""


class ConfigurationError(DocDBDemoError):
    pass


class CredentialResolutionError(DocDBDemoError):
    pass


class IdentityServiceError(DocDBDemoError):
    pass


class CertificateBundleError(DocDBDemoError):
    pass


class DatabaseConnectionError(DocDBDemoError):
    pass


class TLSVerificationError(DatabaseConnectionError):
    pass


class QueryError(DocDBDemoError):
    pass


class DocumentNotFoundError(QueryError):
    pass


class RecordDecodeError(QueryError):
    pass
