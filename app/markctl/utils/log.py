"""Logging setup for the markctl CLI.

Library modules only create loggers; the CLI decides where records go.
"""

import logging


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger.

    debug == False -> WARNING
    debug == True  -> DEBUG

    Records go to stderr so they never mix with forwarded command output.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
