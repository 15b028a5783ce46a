"""Resolution of station identifiers in any of the supported encodings.

Accepted forms all reduce to the same bare code:

    008892007
    BE.NMBS.008892007
    http://irail.be/stations/NMBS/008892007
"""

import logging
import re

from .catalog import Catalog
from .exceptions import StationNotFound
from .models import StationRecord

logger = logging.getLogger(__name__)

CODE_LENGTH = 9
_QUERY_OR_FRAGMENT = re.compile(r"[?#].*$")


def bare_code(identifier: str) -> str:
    """Strip URI and COUNTRY.OPERATOR. prefixes, leaving the bare code.

    Parsing is lenient: anything left over is tried as a code, and short
    all-digit codes are zero padded ("8892007" -> "008892007").
    """
    code = _QUERY_OR_FRAGMENT.sub("", identifier.strip()).rstrip("/")
    code = code.rsplit("/", 1)[-1]
    code = code.rsplit(".", 1)[-1]
    if code.isdigit() and len(code) < CODE_LENGTH:
        code = code.zfill(CODE_LENGTH)
    return code


def resolve(catalog: Catalog, identifier: str) -> StationRecord:
    """Return the station an identifier refers to.

    Raises:
        StationNotFound: if no station has the resolved bare code.
    """
    code = bare_code(identifier or "")
    station = catalog.by_code.get(code)
    if station is None:
        logger.debug("No station for identifier %r (code %r)", identifier, code)
        raise StationNotFound(identifier, code)
    return station
