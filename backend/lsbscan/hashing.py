# Content digests for analysed uploads

from Crypto.Hash import SHA256
import logging

logger = logging.getLogger(__name__)


def sha256_hex(data: bytes) -> str:
    h = SHA256.new(data)
    digest = h.hexdigest()
    logger.debug(f'sha256_hex computed: length={len(data)}, digest={digest}')
    return digest
