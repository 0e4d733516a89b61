"""Server and generator configuration.

HtexConfig is a frozen dataclass — immutable after creation, shared by the
live server, the static generator, and the CLI.
"""

from dataclasses import dataclass
from pathlib import Path

from htex.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class HtexConfig:
    """Configuration for one content root. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = HtexConfig(root="site", port=8080, verbose=True)
    """

    # Content
    root: str | Path = "public"
    keep_comments: bool = False  # Keep <!-- ... --> in rendered output
    read_chunk_size: int = 4096  # Tokenizer read buffer

    # Server
    host: str = "0.0.0.0"
    port: int = 0  # 0 = 80, or 443 when TLS is configured
    verbose: bool = False

    # TLS (optional, both required)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    # Static generation
    output: str | Path = "output"

    # Markdown (<!include-markdown>)
    markdown_plugins: tuple[str, ...] = ("all",)

    @property
    def root_path(self) -> Path:
        """Absolute content root."""
        return Path(self.root).absolute()

    @property
    def output_path(self) -> Path:
        """Absolute generation target directory."""
        return Path(self.output).absolute()

    @property
    def tls(self) -> bool:
        """True when both the certificate chain and private key are set."""
        return bool(self.ssl_certfile and self.ssl_keyfile)

    @property
    def listen_port(self) -> int:
        """The port to bind, applying the 80/443 default."""
        if self.port:
            return self.port
        return 443 if self.tls else 80

    def require_root(self) -> Path:
        """Return the content root, raising if it is not a directory."""
        root = self.root_path
        if not root.is_dir():
            msg = f"cannot open directory: {root}"
            raise ConfigurationError(msg)
        return root
