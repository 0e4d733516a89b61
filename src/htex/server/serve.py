"""Server bootstrap.

Starts a pounce ASGI server with the live htex application, over HTTPS
when a certificate chain and key are configured.
"""

from htex.config import HtexConfig


def server_url(config: HtexConfig) -> str:
    scheme = "https" if config.tls else "http"
    return f"{scheme}://localhost:{config.listen_port}"


def run_server(app: object, config: HtexConfig) -> None:
    """Serve *app* with pounce until interrupted.

    Pounce's ``run()`` takes an import string, but htex has a live
    application object, so ``pounce.Server`` is used directly.

    Args:
        app: ASGI callable (htex application instance).
        config: Bind address, port and TLS settings.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    server_config = ServerConfig(
        host=config.host,
        port=config.listen_port,
        workers=1,
        reload=False,
        ssl_certfile=config.ssl_certfile if config.tls else None,
        ssl_keyfile=config.ssl_keyfile if config.tls else None,
    )
    server = Server(server_config, app)
    server.run()
