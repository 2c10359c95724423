"""EULA acceptance for provisioned servers."""

import logging
from pathlib import Path

from .constants import EULA_ACCEPTED_TOKEN, EULA_FILENAME

logger = logging.getLogger(__name__)


class EulaWriter:
    """Writes the EULA acceptance marker on the operator's behalf."""

    def __init__(self, filename: str = EULA_FILENAME, token: str = EULA_ACCEPTED_TOKEN) -> None:
        self.filename = filename
        self.token = token

    def ensure(self, server_dir: Path) -> bool:
        """
        Accept the EULA in server_dir.

        Any existing file without the acceptance token is overwritten.

        Returns:
            True if the file was written, False if it already held the token
        """
        eula_path = Path(server_dir) / self.filename
        if eula_path.is_file() and self.token in eula_path.read_text(encoding="utf-8", errors="replace"):
            logger.debug("EULA already accepted")
            return False

        eula_path.parent.mkdir(parents=True, exist_ok=True)
        eula_path.write_text(self.token, encoding="utf-8")
        logger.info("EULA accepted.")
        return True
