"""
Runtime configuration.

One frozen ``ReconciliationConfig`` is built at startup (defaults, CLI flags
or ``from_env``) and handed to the engine and runner, so tests can vary the
identifier pattern or the minimum run time without patching constants.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_IDENTIFIER_DIGITS = 9
DEFAULT_IDENTIFIER_SUFFIX = "CL"
DEFAULT_MINIMUM_EXECUTION_SECONDS = 0.4
DEFAULT_TEMPLATE_FILE = "templates.json"


@dataclass(frozen=True)
class ReconciliationConfig:
    """
    Settings shared by the engine, the runner and the CLI.

    Attributes:
        identifier_digits: Length of the numeric part of a row identifier
        identifier_suffix: Literal suffix following the digits ("" allowed)
        minimum_execution_seconds: Floor on the wall-clock time of a
            background run before its result is delivered
        delimiter: Field delimiter of the snapshot files
        encoding: Text encoding of the snapshot files
        template_file: Path of the saved column-template store
    """

    identifier_digits: int = DEFAULT_IDENTIFIER_DIGITS
    identifier_suffix: str = DEFAULT_IDENTIFIER_SUFFIX
    minimum_execution_seconds: float = DEFAULT_MINIMUM_EXECUTION_SECONDS
    delimiter: str = ","
    encoding: str = "utf-8-sig"
    template_file: str = DEFAULT_TEMPLATE_FILE

    def __post_init__(self):
        if self.identifier_digits <= 0:
            raise ValueError(
                f"identifier_digits must be positive, got {self.identifier_digits}"
            )
        if self.minimum_execution_seconds < 0:
            raise ValueError(
                f"minimum_execution_seconds cannot be negative, "
                f"got {self.minimum_execution_seconds}"
            )
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")

    @classmethod
    def from_env(cls) -> "ReconciliationConfig":
        """
        Build a config from environment variables.

        Environment variables:
            SNAPSHOT_DIFF_IDENTIFIER_DIGITS: digit count (default: 9)
            SNAPSHOT_DIFF_IDENTIFIER_SUFFIX: suffix (default: CL)
            SNAPSHOT_DIFF_MIN_TIME: minimum run time in seconds (default: 0.4)
            SNAPSHOT_DIFF_DELIMITER: field delimiter (default: ,)
            SNAPSHOT_DIFF_ENCODING: file encoding (default: utf-8-sig)
            SNAPSHOT_DIFF_TEMPLATE_FILE: template store path (default: templates.json)

        Raises:
            ValueError: If a numeric variable does not parse or a value is out of range
        """
        config = cls(
            identifier_digits=int(
                os.getenv("SNAPSHOT_DIFF_IDENTIFIER_DIGITS", DEFAULT_IDENTIFIER_DIGITS)
            ),
            identifier_suffix=os.getenv(
                "SNAPSHOT_DIFF_IDENTIFIER_SUFFIX", DEFAULT_IDENTIFIER_SUFFIX
            ),
            minimum_execution_seconds=float(
                os.getenv("SNAPSHOT_DIFF_MIN_TIME", DEFAULT_MINIMUM_EXECUTION_SECONDS)
            ),
            delimiter=os.getenv("SNAPSHOT_DIFF_DELIMITER", ","),
            encoding=os.getenv("SNAPSHOT_DIFF_ENCODING", "utf-8-sig"),
            template_file=os.getenv("SNAPSHOT_DIFF_TEMPLATE_FILE", DEFAULT_TEMPLATE_FILE),
        )
        logger.debug(f"Loaded configuration from environment: {config}")
        return config
