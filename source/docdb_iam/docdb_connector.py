# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Connects to a single DocumentDB node with IAM (MONGODB-AWS) authentication over
TLS and reads the first document of the users collection.
"""
import ssl
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO, cast

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from docdb_iam.config import AppConfig
from docdb_iam.credentials import build_credential
from docdb_iam.exceptions import (
    DatabaseConnectionError,
    DocumentNotFoundError,
    QueryError,
)
from docdb_iam.powertools_logger import get_logger
from docdb_iam.tls_trust import (
    build_ssl_context,
    client_tls_options,
    load_certificate_bundle,
    verify_server_certificate,
)
from docdb_iam.user_record import UserRecord

logger = get_logger("docdb_connector")


class DocumentDBConnector:
    def __init__(self, config: AppConfig):
        self.config = config
        self._client_options: Optional[dict[str, Any]] = None
        self._ssl_context: Optional[ssl.SSLContext] = None

    def prepare(self) -> dict[str, Any]:
        """
        Builds the driver options without touching the network. Configuration,
        certificate bundle and credential problems are all raised from here.
        """
        self.config.require_database_settings()

        bundle = load_certificate_bundle(self.config.ca_bundle_path)
        self._ssl_context = build_ssl_context(bundle)
        credential = build_credential(self.config)

        options: dict[str, Any] = {"directConnection": True}
        options.update(client_tls_options(bundle))
        options.update(credential.to_client_options())
        if self.config.server_selection_timeout_ms is not None:
            options["serverSelectionTimeoutMS"] = (
                self.config.server_selection_timeout_ms
            )

        logger.debug(
            "Prepared DocumentDB client options",
            extra={
                "host": self.config.docdb_host,
                "port": self.config.docdb_port,
                "caBundle": bundle.path,
                "certificateCount": len(bundle.certificates),
                "authMechanism": credential.mechanism,
                "sessionToken": bool(credential.mechanism_properties),
            },
        )
        self._client_options = options
        return options

    @contextmanager
    def connect(self) -> Iterator[MongoClient]:
        """Opens a direct connection and closes it on every exit path."""
        options = self._client_options or self.prepare()

        host, port = self.config.docdb_host, self.config.docdb_port
        verify_server_certificate(
            host, port, cast(ssl.SSLContext, self._ssl_context)
        )

        try:
            client: MongoClient = MongoClient(
                f"mongodb://{self.config.docdb_address}", **options
            )
        except (PyMongoError, ValueError) as e:
            raise DatabaseConnectionError(
                f"Unable to create a client for {self.config.docdb_url}: {e}"
            ) from e

        try:
            try:
                client.admin.command("ping")
            except PyMongoError as e:
                raise DatabaseConnectionError(
                    f"Unable to connect to {self.config.docdb_url}: {e}"
                ) from e
            logger.info("Connected to DocumentDB", extra={"host": host, "port": port})
            yield client
        finally:
            client.close()

    def find_first_user(self, client: MongoClient) -> UserRecord:
        collection = client[self.config.database_name][self.config.collection_name]
        try:
            document = collection.find_one({})
        except PyMongoError as e:
            raise QueryError(
                f"find_one on {collection.full_name} failed: {e}"
            ) from e

        if document is None:
            raise DocumentNotFoundError(f"No documents in {collection.full_name}")

        return UserRecord.from_document(document)


def connect_and_read(config: AppConfig, out: TextIO = sys.stdout) -> UserRecord:
    print("== Connect", config.docdb_url, file=out)
    connector = DocumentDBConnector(config)
    print("Preparing...", file=out)
    connector.prepare()

    with connector.connect() as client:
        print("Connected.", file=out)
        record = connector.find_first_user(client)

    print("Result: ", record, file=out)
    return record
