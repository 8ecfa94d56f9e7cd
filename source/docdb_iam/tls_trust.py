# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
TLS trust configuration for the DocumentDB connection.

The cluster certificate is issued by the Amazon RDS certificate authorities,
which are not in the system trust store. The CA bundle published by AWS
(global-bundle.pem) is loaded from disk and used as the only trust root.
"""
import re
import socket
import ssl
from dataclasses import dataclass, field
from typing import Any

from docdb_iam.exceptions import (
    CertificateBundleError,
    DatabaseConnectionError,
    TLSVerificationError,
)
from docdb_iam.powertools_logger import get_logger

logger = get_logger("tls_trust")

PEM_CERTIFICATE_PATTERN = re.compile(
    r"-----BEGIN CERTIFICATE-----\s*.+?\s*-----END CERTIFICATE-----",
    re.DOTALL,
)

DEFAULT_HANDSHAKE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class CertificateBundle:
    path: str
    certificates: list[bytes] = field(default_factory=list, repr=False)

    def to_pem(self) -> str:
        return "".join(ssl.DER_cert_to_PEM_cert(der) for der in self.certificates)


def load_certificate_bundle(path: str) -> CertificateBundle:
    """
    Reads a PEM bundle and returns the DER encoding of every certificate in it.
    Blocks that are not certificates are ignored.
    """
    try:
        with open(path, encoding="ascii", errors="replace") as bundle_file:
            contents = bundle_file.read()
    except OSError as e:
        raise CertificateBundleError(
            f"Unable to read certificate bundle {path}: {e}"
        ) from e

    certificates = []
    for block in PEM_CERTIFICATE_PATTERN.findall(contents):
        try:
            certificates.append(ssl.PEM_cert_to_DER_cert(block))
        except ValueError:
            logger.warning("Skipping malformed certificate block", extra={"path": path})

    if not certificates:
        raise CertificateBundleError(f"No certificates found in bundle {path}")

    logger.debug(
        "Loaded certificate bundle",
        extra={"path": path, "certificateCount": len(certificates)},
    )
    return CertificateBundle(path=path, certificates=certificates)


def build_ssl_context(bundle: CertificateBundle) -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        context.load_verify_locations(cadata=bundle.to_pem())
    except ssl.SSLError as e:
        raise CertificateBundleError(
            f"Certificate bundle {bundle.path} could not be loaded: {e}"
        ) from e
    return context


def client_tls_options(bundle: CertificateBundle) -> dict[str, Any]:
    # The driver skips the system trust store whenever tlsCAFile is given.
    return {"tls": True, "tlsCAFile": bundle.path}


def verify_server_certificate(
    host: str,
    port: int,
    context: ssl.SSLContext,
    timeout: float = DEFAULT_HANDSHAKE_TIMEOUT_SECONDS,
) -> None:
    """
    Completes a TLS handshake with host:port using only the given trust roots.

    Raises:
        TLSVerificationError: the server certificate is not trusted by the bundle
        DatabaseConnectionError: the server could not be reached
    """
    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            with context.wrap_socket(sock, server_hostname=host) as tls_sock:
                logger.debug(
                    "TLS handshake completed",
                    extra={"host": host, "port": port, "version": tls_sock.version()},
                )
    except ssl.SSLCertVerificationError as e:
        raise TLSVerificationError(
            f"Server certificate for {host}:{port} is not trusted by the bundle: {e.verify_message}"
        ) from e
    except (OSError, ssl.SSLError) as e:
        raise DatabaseConnectionError(
            f"Unable to establish a TLS session with {host}:{port}: {e}"
        ) from e
