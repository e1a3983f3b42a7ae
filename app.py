import socket

from course_browser.config import load_app_config
from course_browser.logging_config import configure_logging
from course_browser.ui.dash_app import create_dash_app

logger = configure_logging()

config = load_app_config()
app = create_dash_app(config=config, logger=logger)
server = app.server


def find_free_port(start_port: int) -> int:
    """Finds an available port starting from start_port."""
    port = start_port
    while port < start_port + 100:  # Try up to 100 ports
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(('localhost', port)) != 0:
                return port
        port += 1
    return start_port


if __name__ == "__main__":
    final_port = find_free_port(config.port)

    if final_port != config.port:
        logger.warning(
            "Preferred port taken, using next free port",
            extra={"preferred_port": config.port, "port": final_port},
        )

    app.run(host="0.0.0.0", port=final_port, debug=config.debug)
