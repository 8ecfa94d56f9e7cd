# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Runtime configuration.

All settings are read from the environment once, at start-up, into an immutable
AppConfig that is handed to each step explicitly.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from docdb_iam.exceptions import ConfigurationError

DEFAULT_CA_BUNDLE = "global-bundle.pem"
DEFAULT_DOCDB_PORT = 27017
DATABASE_NAME = "test"
COLLECTION_NAME = "users"


@dataclass(frozen=True)
class AppConfig:
    access_key_id: str = ""
    secret_access_key: str = field(default="", repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    region: Optional[str] = None
    docdb_url: str = ""
    ca_bundle_path: str = DEFAULT_CA_BUNDLE
    database_name: str = DATABASE_NAME
    collection_name: str = COLLECTION_NAME
    server_selection_timeout_ms: Optional[int] = None

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "AppConfig":
        env = os.environ if environ is None else environ

        timeout = env.get("DOCDB_SERVER_SELECTION_TIMEOUT_MS", "")
        try:
            timeout_ms = int(timeout) if timeout else None
        except ValueError as e:
            raise ConfigurationError(
                f"DOCDB_SERVER_SELECTION_TIMEOUT_MS must be an integer, got {timeout!r}"
            ) from e

        return cls(
            access_key_id=env.get("AWS_ACCESS_KEY_ID", ""),
            secret_access_key=env.get("AWS_SECRET_ACCESS_KEY", ""),
            session_token=env.get("AWS_SESSION_TOKEN") or None,
            region=env.get("AWS_DEFAULT_REGION") or None,
            docdb_url=env.get("DOCDB_URL", ""),
            ca_bundle_path=env.get("DOCDB_CA_BUNDLE") or DEFAULT_CA_BUNDLE,
            server_selection_timeout_ms=timeout_ms,
        )

    def require_database_settings(self) -> None:
        missing = [
            name
            for name, value in (
                ("AWS_ACCESS_KEY_ID", self.access_key_id),
                ("AWS_SECRET_ACCESS_KEY", self.secret_access_key),
                ("DOCDB_URL", self.docdb_url),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

    @property
    def docdb_host(self) -> str:
        host = self.docdb_url
        if self._has_port():
            host = host.rpartition(":")[0]
        return host.strip("[]")

    @property
    def docdb_port(self) -> int:
        if not self._has_port():
            return DEFAULT_DOCDB_PORT

        port = self.docdb_url.rpartition(":")[2]
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ConfigurationError(f"Invalid port in DOCDB_URL: {self.docdb_url!r}")
        return int(port)

    @property
    def docdb_address(self) -> str:
        """host:port for a mongodb:// URI, with IPv6 literals bracketed."""
        host = self.docdb_host
        if ":" in host:
            host = f"[{host}]"
        return f"{host}:{self.docdb_port}"

    def _has_port(self) -> bool:
        # an IPv6 literal is only followed by a port when bracketed
        host, sep, _ = self.docdb_url.rpartition(":")
        if not sep:
            return False
        return ":" not in host or host.endswith("]")
