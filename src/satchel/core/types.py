"""Connection settings for the container daemon."""

import os
import ssl
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..exceptions import DaemonConnectionError

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"
UNIX_BASE_URL = "http://docker"


@dataclass(frozen=True)
class DaemonConfig:
    """Where and how to reach the Docker Engine API."""

    host: str = DEFAULT_DOCKER_HOST
    api_version: Optional[str] = None
    cert_path: Optional[str] = None
    tls_verify: bool = False
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DaemonConfig":
        """Build a config from the standard Docker client environment variables.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            DaemonConfig honouring DOCKER_HOST, DOCKER_API_VERSION,
            DOCKER_CERT_PATH and DOCKER_TLS_VERIFY
        """
        env = os.environ if environ is None else environ
        tls_verify = env.get("DOCKER_TLS_VERIFY", "") != ""
        cert_path = env.get("DOCKER_CERT_PATH") or None
        if tls_verify and cert_path is None:
            cert_path = str(Path.home() / ".docker")

        return cls(
            host=env.get("DOCKER_HOST") or DEFAULT_DOCKER_HOST,
            api_version=env.get("DOCKER_API_VERSION") or None,
            cert_path=cert_path,
            tls_verify=tls_verify,
        )

    @property
    def is_unix(self) -> bool:
        return self.host.startswith("unix://")

    @property
    def use_tls(self) -> bool:
        return self.tls_verify or self.cert_path is not None

    @property
    def socket_path(self) -> str:
        """Filesystem path of the daemon socket for unix:// hosts."""
        return self.host[len("unix://") :]

    @property
    def base_url(self) -> str:
        """HTTP base URL for API requests, including the version prefix."""
        if self.is_unix:
            url = UNIX_BASE_URL
        elif self.host.startswith("tcp://"):
            scheme = "https" if self.use_tls else "http"
            url = f"{scheme}://{self.host[len('tcp://') :]}"
        elif self.host.startswith(("http://", "https://")):
            url = self.host
        else:
            raise DaemonConnectionError(f"Unsupported DOCKER_HOST: {self.host}")

        url = url.rstrip("/")
        if self.api_version:
            url = f"{url}/v{self.api_version.lstrip('v')}"
        return url

    def ssl_context(self) -> Optional[ssl.SSLContext]:
        """Build the TLS context for tcp hosts, or None when TLS is off."""
        if self.is_unix or not self.use_tls:
            return None

        cert_dir = Path(self.cert_path) if self.cert_path else None
        try:
            if self.tls_verify:
                cafile = cert_dir / "ca.pem" if cert_dir else None
                context = ssl.create_default_context(
                    cafile=str(cafile) if cafile and cafile.exists() else None
                )
            else:
                context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE

            if cert_dir and (cert_dir / "cert.pem").exists():
                context.load_cert_chain(
                    str(cert_dir / "cert.pem"), str(cert_dir / "key.pem")
                )
        except (ssl.SSLError, OSError) as e:
            raise DaemonConnectionError(
                f"Invalid TLS material in {cert_dir}: {e}"
            ) from e
        return context
